import threading

import pytest

from app.core.exceptions import ConflictError, InvalidTransitionError, NotFoundError, ValidationError
from app.models.order import OrderStatus
from app.services.order_status import VALID_TRANSITIONS, check_transition, is_terminal, parse_status

ALL_STATUSES = list(OrderStatus)


def stored_status(repository, order_id):
    return repository.get_order_by_id(order_id).status


class TestStateMachine:
    @pytest.mark.parametrize("current", ALL_STATUSES)
    @pytest.mark.parametrize("requested", ALL_STATUSES)
    def test_table(self, current, requested):
        if requested in VALID_TRANSITIONS[current]:
            check_transition(current, requested)
        else:
            with pytest.raises(InvalidTransitionError):
                check_transition(current, requested)

    def test_terminal_states(self):
        assert is_terminal(OrderStatus.DELIVERED)
        assert is_terminal(OrderStatus.CANCELLED)
        assert not any(is_terminal(s) for s in ALL_STATUSES if s not in (OrderStatus.DELIVERED, OrderStatus.CANCELLED))

    def test_cancel_only_before_preparation(self):
        cancellable = {s for s in ALL_STATUSES if OrderStatus.CANCELLED in VALID_TRANSITIONS[s]}
        assert cancellable == {OrderStatus.PENDING, OrderStatus.CONFIRMED}

    @pytest.mark.parametrize("raw", ["confirmed", " CONFIRMED ", OrderStatus.CONFIRMED])
    def test_parse_status(self, raw):
        assert parse_status(raw) == OrderStatus.CONFIRMED

    def test_parse_unknown_status(self):
        with pytest.raises(ValidationError):
            parse_status("SHIPPED")


class TestUpdateStatus:
    @pytest.mark.parametrize("requested", [OrderStatus.CONFIRMED, OrderStatus.CANCELLED])
    def test_legal_moves_from_pending(self, order_service, repository, placed_order, requested):
        assert order_service.update_status(placed_order, requested) == requested
        assert stored_status(repository, placed_order) == requested

    @pytest.mark.parametrize(
        "requested",
        [OrderStatus.PENDING, OrderStatus.PREPARING, OrderStatus.OUT_FOR_DELIVERY, OrderStatus.DELIVERED],
    )
    def test_illegal_moves_from_pending(self, order_service, repository, placed_order, requested):
        with pytest.raises(InvalidTransitionError):
            order_service.update_status(placed_order, requested)

        assert stored_status(repository, placed_order) == OrderStatus.PENDING

    @pytest.mark.parametrize("terminal", [OrderStatus.DELIVERED, OrderStatus.CANCELLED])
    @pytest.mark.parametrize("requested", ALL_STATUSES)
    def test_terminal_states_are_final(self, order_service, repository, placed_order, force_status, terminal, requested):
        force_status(placed_order, terminal)

        with pytest.raises(InvalidTransitionError):
            order_service.update_status(placed_order, requested)

        assert stored_status(repository, placed_order) == terminal

    def test_full_delivery_path(self, order_service, repository, placed_order):
        for status in ["CONFIRMED", "PREPARING", "OUT_FOR_DELIVERY", "DELIVERED"]:
            assert order_service.update_status(placed_order, status) == OrderStatus(status)

        assert stored_status(repository, placed_order) == OrderStatus.DELIVERED

    def test_delivered_straight_after_placement(self, order_service, repository, placed_order):
        with pytest.raises(InvalidTransitionError) as exc_info:
            order_service.update_status(placed_order, "DELIVERED")

        assert exc_info.value.current_status == OrderStatus.PENDING
        assert exc_info.value.requested_status == OrderStatus.DELIVERED
        assert stored_status(repository, placed_order) == OrderStatus.PENDING

    def test_cannot_cancel_once_preparing(self, order_service, repository, placed_order, force_status):
        force_status(placed_order, OrderStatus.PREPARING)

        with pytest.raises(InvalidTransitionError):
            order_service.update_status(placed_order, OrderStatus.CANCELLED)

        assert stored_status(repository, placed_order) == OrderStatus.PREPARING

    def test_unknown_order(self, order_service):
        with pytest.raises(NotFoundError):
            order_service.update_status(4242, OrderStatus.CONFIRMED)

    def test_unknown_status_is_rejected_before_reading(self, order_service, repository, placed_order, monkeypatch):
        def fail(*args, **kwargs):
            raise AssertionError("store must not be touched")

        monkeypatch.setattr(repository, "get_order_by_id", fail)

        with pytest.raises(ValidationError):
            order_service.update_status(placed_order, "TELEPORTED")


class TestConcurrentUpdates:
    def test_racing_updates_have_one_winner(self, order_service, repository, placed_order, force_status, monkeypatch):
        force_status(placed_order, OrderStatus.CONFIRMED)
        read_order = repository.get_order_by_id
        reads = []
        outcomes = {}

        def read_then_let_competitor_in(order_id):
            record = read_order(order_id)
            reads.append(record.status)
            if len(reads) == 1:
                # The competitor runs between our read and our write
                outcomes["competitor"] = order_service.update_status(order_id, OrderStatus.PREPARING)
            return record

        monkeypatch.setattr(repository, "get_order_by_id", read_then_let_competitor_in)

        with pytest.raises(InvalidTransitionError):
            order_service.update_status(placed_order, OrderStatus.CANCELLED)

        assert outcomes["competitor"] == OrderStatus.PREPARING
        assert read_order(placed_order).status == OrderStatus.PREPARING
        # the loser saw the stale CONFIRMED first, then re-read PREPARING
        assert reads[0] == OrderStatus.CONFIRMED
        assert reads[-1] == OrderStatus.PREPARING

    def test_racing_threads_have_one_winner(self, order_service, repository, placed_order, force_status, monkeypatch):
        force_status(placed_order, OrderStatus.CONFIRMED)
        read_order = repository.get_order_by_id
        both_read = threading.Barrier(2, timeout=10)
        local = threading.local()

        def read_then_wait(order_id):
            record = read_order(order_id)
            if not getattr(local, "waited", False):
                # both threads hold CONFIRMED before either writes
                local.waited = True
                both_read.wait()
            return record

        monkeypatch.setattr(repository, "get_order_by_id", read_then_wait)
        results = {}
        errors = {}

        def move_to(status):
            try:
                results[status] = order_service.update_status(placed_order, status)
            except Exception as e:
                errors[status] = e

        threads = [threading.Thread(target=move_to, args=(s,)) for s in (OrderStatus.PREPARING, OrderStatus.CANCELLED)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=30)

        assert not any(t.is_alive() for t in threads)
        assert len(results) == 1
        assert len(errors) == 1
        assert all(isinstance(e, (InvalidTransitionError, ConflictError)) for e in errors.values())
        (winner,) = results
        assert read_order(placed_order).status == winner

    def test_gives_up_with_conflict(self, order_service, repository, placed_order, monkeypatch, settings):
        attempts = []

        def always_stale(order_id, new_status, expected_status=None):
            attempts.append(new_status)
            return False

        monkeypatch.setattr(repository, "update_order_status", always_stale)

        with pytest.raises(ConflictError):
            order_service.update_status(placed_order, OrderStatus.CONFIRMED)

        assert len(attempts) == settings.STATUS_UPDATE_MAX_RETRIES
        assert stored_status(repository, placed_order) == OrderStatus.PENDING
