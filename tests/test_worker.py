import threading

from blockpoker.models import DealResult, ErrorKind, FoldResult, GameError, ShowdownResult
from blockpoker.worker import PokerWorker

from .helpers import BLOCK_A, BLOCK_B, create_worker


def test_start_is_one_shot():
    worker = PokerWorker()
    assert worker.start() is True
    assert worker.start() is False
    worker.stop()
    assert worker.start() is False
    assert worker.running is False


def test_stop_before_start_prevents_any_start():
    worker = PokerWorker()
    worker.stop()
    assert worker.start() is False
    assert worker.running is False
    assert worker.wait_shutdown(timeout=0) is True
    assert worker.on_tip_change(BLOCK_A, False) is None


def test_move_started_before_stop_still_completes():
    worker = create_worker()
    dealt = threading.Event()
    release = threading.Event()
    outcome = []
    real_deal = worker.session.deal

    def slow_deal():
        dealt.set()
        release.wait(timeout=5)
        return real_deal()

    worker.session.deal = slow_deal
    thread = threading.Thread(target=lambda: outcome.append(worker.deal()))
    thread.start()
    assert dealt.wait(timeout=5)
    worker.stop()
    release.set()
    thread.join(timeout=5)

    assert isinstance(outcome[0], DealResult)
    result = worker.deal()
    assert isinstance(result, GameError)
    assert result.kind == ErrorKind.ENGINE_NOT_RUNNING


def test_tip_change_ignored_until_started():
    worker = PokerWorker()
    assert worker.on_tip_change(BLOCK_A, False) is None
    assert worker.snapshot().bound_block_id is None


def test_tip_change_reseeds_when_running():
    worker = create_worker(BLOCK_A)
    snapshot = worker.on_tip_change(BLOCK_B, False)
    assert snapshot is not None
    assert snapshot.bound_block_id == BLOCK_B
    assert snapshot.deck_size == 52


def test_bulk_replay_tips_are_ignored():
    worker = create_worker(BLOCK_A)
    worker.deal()
    assert worker.on_tip_change(BLOCK_B, True) is None
    snapshot = worker.snapshot()
    assert snapshot.bound_block_id == BLOCK_A
    assert snapshot.has_active_hand


def test_moves_delegate_to_session():
    worker = create_worker()
    assert isinstance(worker.deal(), DealResult)
    assert isinstance(worker.play(), ShowdownResult)
    assert isinstance(worker.deal(), DealResult)
    assert isinstance(worker.fold(), FoldResult)
    assert worker.snapshot().round == 3


def test_moves_fail_when_not_running():
    worker = PokerWorker()
    for move in (worker.deal, worker.play, worker.fold):
        result = move()
        assert isinstance(result, GameError)
        assert result.kind == ErrorKind.ENGINE_NOT_RUNNING

    worker = create_worker()
    worker.stop()
    result = worker.deal()
    assert isinstance(result, GameError)
    assert result.kind == ErrorKind.ENGINE_NOT_RUNNING
    assert worker.on_tip_change(BLOCK_B, False) is None


def test_handle_move_dispatches_by_name():
    worker = create_worker()
    assert isinstance(worker.handle_move(" Deal "), DealResult)
    assert isinstance(worker.handle_move("PLAY"), ShowdownResult)
    result = worker.handle_move("raise")
    assert isinstance(result, GameError)
    assert result.kind == ErrorKind.UNKNOWN_MOVE


def test_stop_is_idempotent_and_releases_waiters():
    worker = create_worker()
    assert worker.wait_shutdown(timeout=0) is False

    released = threading.Event()

    def waiter() -> None:
        worker.wait_shutdown()
        released.set()

    thread = threading.Thread(target=waiter)
    thread.start()
    worker.stop()
    worker.stop()
    thread.join(timeout=2)
    assert released.is_set()
    assert worker.wait_shutdown(timeout=0) is True


def test_stop_does_not_wait_for_the_session_lock():
    worker = create_worker()
    with worker.session._lock:
        worker.stop()
    assert worker.running is False
