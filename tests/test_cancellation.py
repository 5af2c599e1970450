import threading

from dancelinks import Cancelled, Dlx, Finished, SearchStep, SolutionFound, Started
from dancelinks.engine import SearchEngine
from dancelinks.events import Observers
from dancelinks.matrix import build_matrix


def test_cancelled_event_fires_using_a_cancellation_event():
    stop = threading.Event()
    dlx = Dlx(cancellation=stop)
    cancelled = []
    dlx.on_cancelled(cancelled.append)
    dlx.on_started(lambda event: stop.set())

    thread = threading.Thread(target=lambda: next(dlx.solve([]), None))
    thread.start()
    thread.join()

    assert cancelled == [Cancelled()]


def test_cancelling_before_any_pull_has_no_effect(three_solution_matrix):
    stop = threading.Event()
    dlx = Dlx(cancellation=stop)
    events = []
    for event_type in (Started, Finished, Cancelled):
        dlx.subscribe(event_type, events.append)
    solutions = dlx.solve(three_solution_matrix)
    stop.set()
    solutions.close()
    assert events == []


def test_pulling_after_cancellation_ends_immediately(three_solution_matrix):
    stop = threading.Event()
    stop.set()
    dlx = Dlx(cancellation=stop)
    steps = []
    events = []
    dlx.on_search_step(steps.append)
    for event_type in (Started, Finished, Cancelled):
        dlx.subscribe(event_type, events.append)
    assert list(dlx.solve(three_solution_matrix)) == []
    assert steps == [SearchStep(0)]
    assert events == [Started(), Cancelled()]


def test_cancel_after_first_solution(three_solution_matrix):
    stop = threading.Event()
    dlx = Dlx(cancellation=stop)
    log = []
    for event_type in (Started, Finished, Cancelled, SearchStep, SolutionFound):
        dlx.subscribe(event_type, log.append)

    @dlx.on_solution_found
    def stop_after_first(event):
        stop.set()

    solutions = list(dlx.solve(three_solution_matrix))
    assert [s.row_indexes for s in solutions] == [(0, 3, 4)]

    kinds = [type(e) for e in log]
    assert kinds.count(Cancelled) == 1
    assert Finished not in kinds
    # Only the step that observed the signal follows the solution.
    first_solution = kinds.index(SolutionFound)
    assert kinds[first_solution + 1:] == [SearchStep, Cancelled]


def test_cancel_from_another_thread(doubling_matrix):
    stop = threading.Event()
    dlx = Dlx(cancellation=stop)
    first_found = threading.Event()
    resume = threading.Event()
    pulled = []
    cancelled = []
    finished = []
    dlx.on_cancelled(cancelled.append)
    dlx.on_finished(finished.append)

    def consume():
        for solution in dlx.solve(doubling_matrix):
            pulled.append(solution)
            if len(pulled) == 1:
                first_found.set()
                resume.wait(5)

    worker = threading.Thread(target=consume)
    worker.start()
    assert first_found.wait(5)
    stop.set()
    resume.set()
    worker.join(5)

    assert not worker.is_alive()
    assert len(pulled) == 1
    assert cancelled == [Cancelled()]
    assert finished == []


def test_cancelled_engine_restores_the_matrix(three_solution_matrix):
    stop = threading.Event()
    matrix = build_matrix(three_solution_matrix)
    engine = SearchEngine(matrix, Observers(), cancellation=stop)
    search = engine.search()
    next(search)
    stop.set()
    assert list(search) == []
    assert engine.cancelled
    assert engine.solutions_found == 1
    matrix.check_rings()


def test_closed_engine_restores_the_matrix(knuth_matrix):
    matrix = build_matrix(knuth_matrix)
    engine = SearchEngine(matrix, Observers())
    search = engine.search()
    assert next(search).row_indexes == (0, 3, 4)
    search.close()
    assert not engine.cancelled
    matrix.check_rings()


def test_exhausted_engine_restores_the_matrix(three_solution_matrix):
    matrix = build_matrix(three_solution_matrix, 3)
    engine = SearchEngine(matrix, Observers())
    assert len(list(engine.search())) > 0
    matrix.check_rings()
    # The restored matrix can be searched again with the same result.
    again = SearchEngine(matrix, Observers())
    assert [s.row_indexes for s in again.search()] == [
        s.row_indexes for s in SearchEngine(build_matrix(three_solution_matrix, 3), Observers()).search()
    ]
