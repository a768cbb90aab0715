"""
Test script for solver validation

Tests:
1. BoardState creation, keys and level validation
2. Move generation rules
3. Transition engine (slide, gravity, removal)
4. Solvability pruning
5. Search strategies end to end

Usage:
    python tests/test_solver.py
"""

import sys
import time
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from pupusolver.solver import (
    BoardState,
    IllegalMove,
    InvalidLevelDimensions,
    Move,
    SolutionContext,
    Tile,
    UnknownTileSymbol,
    apply_move,
    create_strategy,
    get_default_strategy_name,
    get_strategy_class,
    get_strategy_names,
    is_legal_move,
    possible_moves,
    register_strategy,
    replay_moves,
    settle,
    solve_board,
    strategy_options,
)
from pupusolver.solver.engine import connected_group, drop_tiles, remove_tiles
from pupusolver.solver.strategies import BreadthFirstStrategy, ParallelBreadthFirstStrategy


LEVEL_93 = """
PPPPPPPPPPPP
PPPPPPPPPPPP
PPPPP##PPPPP
PPPP#.R#PPPP
PPP#..2R#PPP
PP#...S2F#PP
PP#...FS1#PP
PPP#..1R#PPP
PPPP#.F#PPPP
PPPPP##PPPPP
PPPPPPPPPPPP
PPPPPPPPPPPP
"""

EMPTY_ROW = "." * 12


def board_from(*rows: str) -> BoardState:
    """Build a board of any size from symbol rows."""
    return BoardState.from_rows(list(rows), width=len(rows[0]), height=len(rows))


def banner(title: str) -> None:
    print("\n" + "=" * 60)
    print(f"TEST: {title}")
    print("=" * 60)


def test_board_state():
    """Test BoardState creation and methods."""
    banner("BoardState")

    board = BoardState.from_text(LEVEL_93)
    print(f"  Created board: {board.rows}x{board.cols}")
    print(f"  Tile counts: {board.tile_counts()}")

    assert board.rows == 12 and board.cols == 12
    assert board.get_cell(3, 6) == Tile.RING
    assert board.get_cell(0, 0) == Tile.BACKGROUND
    assert board.tile_counts() == [0, 0, 0, 3, 2, 2, 2, 3]
    assert board.erasable_count() == 12
    assert board.is_solvable()
    assert not board.is_solved()
    assert board.path == ()

    # Outside the playfield reads as wall
    assert board.get_cell(-1, 0) == Tile.WALL
    assert board.get_cell(0, 12) == Tile.WALL
    assert board.get_cell(12, 5) == Tile.WALL

    # Text round trip
    expected = "".join(line + "\n" for line in LEVEL_93.split())
    assert board.to_text() == expected

    print("  [PASS] BoardState tests")


def test_board_keys_ignore_history():
    """Boards with equal grids are one search state whatever their paths."""
    banner("Board Keys")

    board = BoardState.from_text(LEVEL_93)
    twin = BoardState.from_rows(LEVEL_93.split())
    with_history = BoardState(grid=board.grid, path=(Move(3, 6, 5), Move(4, 6, 5)))

    print(f"  Hash: {hash(board)}")
    assert board == twin == with_history
    assert hash(board) == hash(twin) == hash(with_history)
    assert board.key == with_history.key
    assert len({board, twin, with_history}) == 1
    assert len({board.key, with_history.key}) == 1

    changed = board.to_list()
    changed[3][6] = Tile.EMPTY
    other = BoardState.from_tiles(changed)
    assert other != board
    assert board.diff(other) == [(3, 6)]

    print("  [PASS] Board key tests")


def test_level_validation():
    """Malformed level data is rejected with a specific error."""
    banner("Level Validation")

    rows = LEVEL_93.split()

    with pytest.raises(InvalidLevelDimensions) as too_few:
        BoardState.from_rows(rows[:11])
    assert too_few.value.expected == (12, 12)
    assert too_few.value.actual[0] == 11

    short_row = list(rows)
    short_row[4] = short_row[4][:11]
    with pytest.raises(InvalidLevelDimensions):
        BoardState.from_rows(short_row)

    bad_symbol = list(rows)
    bad_symbol[5] = "PP#..XS2F#PP"
    with pytest.raises(UnknownTileSymbol) as unknown:
        BoardState.from_rows(bad_symbol)
    assert unknown.value.symbol == "X"
    assert (unknown.value.row, unknown.value.col) == (5, 5)

    # Both are ValueErrors for callers that do not care which
    with pytest.raises(ValueError):
        BoardState.from_text("")

    print("  [PASS] Level validation tests")


def test_move_generation():
    """Test the slide rules of the move generator."""
    banner("Move Generation")

    # Tiles slide over empty floor until blocked
    board = board_from(
        "......",
        ".H..D.",
        "######",
    )
    moves = possible_moves(board)
    print(f"  Open floor: {[str(m) for m in moves]}")
    assert moves == [
        Move(1, 1, 0), Move(1, 1, 2), Move(1, 1, 3),
        Move(1, 4, 3), Move(1, 4, 2), Move(1, 4, 5),
    ]

    # Travel ends at a ledge, the ledge cell itself is still offered
    board = board_from(
        ".H....",
        "##.###",
        "######",
    )
    moves = possible_moves(board)
    print(f"  Ledge: {[str(m) for m in moves]}")
    assert moves == [Move(0, 1, 0), Move(0, 1, 2)]

    # Travel ends above a tile of the same kind
    board = board_from(
        ".H....",
        "###H##",
        "######",
    )
    moves = possible_moves(board)
    print(f"  Twin below: {[str(m) for m in moves]}")
    assert moves == [Move(0, 1, 0), Move(0, 1, 2), Move(0, 1, 3)]

    # Glass blocks move, walls and background do not, nothing lands on them
    board = board_from(
        "P.G.#",
        "#####",
    )
    moves = possible_moves(board)
    assert moves == [Move(0, 2, 1), Move(0, 2, 3)]

    # Level 93 moves only target empty cells
    level = BoardState.from_text(LEVEL_93)
    moves = possible_moves(level)
    print(f"  Level 93: {len(moves)} moves")
    assert moves
    for move in moves:
        assert level.get_cell(move.row, move.to_col) == Tile.EMPTY
        assert level.get_cell(move.row, move.from_col).is_mobile
        assert is_legal_move(level, move)

    # Deterministic for a given grid
    assert possible_moves(BoardState.from_text(LEVEL_93)) == moves

    print("  [PASS] Move generation tests")


def test_illegal_moves():
    """Moves the generator would not offer are rejected."""
    banner("Illegal Moves")

    board = board_from(
        ".H....",
        "##.###",
        "######",
    )
    illegal = [
        Move(0, 1, 3),   # past the ledge
        Move(1, 0, 2),   # wall source
        Move(0, 0, 1),   # empty source
        Move(0, 1, 1),   # no-op
        Move(5, 1, 0),   # outside the board
    ]
    for move in illegal:
        assert not is_legal_move(board, move)
        with pytest.raises(IllegalMove) as error:
            apply_move(board, move)
        assert error.value.move == move
        print(f"  Rejected {move}: {error.value}")

    # Occupied destination
    board = board_from(
        "HD..",
        "####",
    )
    with pytest.raises(IllegalMove):
        board.apply_move(Move(0, 0, 1))

    print("  [PASS] Illegal move tests")


def test_gravity_pass():
    """Mobile tiles fall to the lowest empty cell below them."""
    banner("Gravity")

    cells = board_from(
        "HP.",
        "...",
        "D.G",
        "...",
    ).to_list()
    assert drop_tiles(cells)
    assert ["".join(t.symbol for t in row) for row in cells] == [
        ".P.",
        "...",
        "H..",
        "D.G",
    ]
    # A single pass leaves nothing hanging
    assert not drop_tiles(cells)

    print("  [PASS] Gravity tests")


def test_removal_pass():
    """Connected groups of two or more equal erasable tiles vanish."""
    banner("Removal")

    cells = board_from(
        "HHDT",
        "HDDR",
        "GGR.",
    ).to_list()
    assert connected_group(cells, 0, 0) == {(0, 0), (0, 1), (1, 0)}
    assert connected_group(cells, 1, 1) == {(0, 2), (1, 1), (1, 2)}

    assert remove_tiles(cells)
    assert ["".join(t.symbol for t in row) for row in cells] == [
        "...T",
        "...R",
        "GGR.",
    ]
    # Glass blocks never match, diagonal rings do not touch
    assert not remove_tiles(cells)

    print("  [PASS] Removal tests")


def test_apply_move_chain():
    """A slide off a ledge falls next to a twin and both vanish."""
    banner("Apply Move Chain")

    board = board_from(
        "H...",
        "#...",
        "#.H.",
    )
    snapshot = board.grid
    result = board.apply_move(Move(0, 0, 1))

    print(result.to_text())
    assert result.to_text() == "....\n#...\n#...\n"
    assert result.is_solved()
    assert result.path == (Move(0, 0, 1),)

    # Source board untouched
    assert board.grid == snapshot
    assert board.path == ()

    print("  [PASS] Apply move chain tests")


def test_two_tiles_cleared_by_one_move():
    """Two identical tiles brought together by one move clear the board."""
    banner("Two Tiles")

    rows = [EMPTY_ROW] * 11 + ["H....H......"]
    board = BoardState.from_rows(rows)

    result = board.apply_move(Move(11, 0, 4))
    assert result.is_solved()
    assert result.erasable_count() == 0

    solution = solve_board(board)
    print(f"  Solution: {[str(m) for m in solution.moves]}")
    assert solution.solved
    assert solution.moves == [Move(11, 0, 4)]
    assert solution.metrics.boards_examined == 1

    print("  [PASS] Two tile tests")


def test_stabilization_idempotent():
    """Settling a stable board changes nothing."""
    banner("Idempotent Stabilization")

    level = BoardState.from_text(LEVEL_93)
    assert level.settled() == level

    for move in possible_moves(level):
        stable = level.apply_move(move)
        cells = stable.to_list()
        assert not settle(cells)
        assert BoardState.from_tiles(cells) == stable
        assert stable.settled() == stable

    # Unstable level data is brought to rest
    loose = board_from(
        "H.",
        "..",
        "H.",
    )
    settled = loose.settled()
    assert settled.to_text() == "..\n..\n..\n"
    assert settled.settled() == settled

    print("  [PASS] Idempotence tests")


def test_tiles_conserved():
    """Moves rearrange or remove tiles, never create them."""
    banner("Conservation")

    level = BoardState.from_text(LEVEL_93)
    fixed = {
        (r, c): level.get_cell(r, c)
        for r in range(level.rows) for c in range(level.cols)
        if level.get_cell(r, c) in (Tile.WALL, Tile.BACKGROUND)
    }

    frontier = [level]
    for _ in range(3):
        next_frontier = []
        for board in frontier:
            before = board.tile_counts()
            for move in possible_moves(board):
                after_board = board.apply_move(move)
                after = after_board.tile_counts()
                assert all(a <= b for a, b in zip(after, before))
                # Matches remove at least two tiles of a kind
                assert all(b - a != 1 for a, b in zip(after, before))
                for (r, c), tile in fixed.items():
                    assert after_board.get_cell(r, c) == tile
                next_frontier.append(after_board)
        frontier = next_frontier[:50]

    print("  [PASS] Conservation tests")


def test_solvability_check():
    """A lone tile of any kind makes the board unsolvable, for good."""
    banner("Solvability")

    rows = [EMPTY_ROW] * 11 + ["D....D..H..."]
    board = BoardState.from_rows(rows)
    print(f"  Tile counts: {board.tile_counts()}")
    assert not board.is_solvable()
    assert not board.is_solved()

    # Every descendant keeps the lone tile
    frontier = [board]
    for _ in range(2):
        frontier = [b.apply_move(m) for b in frontier for m in possible_moves(b)]
        assert frontier
        for child in frontier:
            assert not child.is_solvable()
            assert not child.is_solved()

    solution = solve_board(board)
    assert not solution.solved
    assert solution.exhausted
    assert solution.final_board is None
    assert solution.moves == []
    assert solution.metrics.boards_examined == 1
    assert solution.metrics.pruned_branches > 0

    # Glass blocks do not count
    glass = BoardState.from_rows([EMPTY_ROW] * 11 + ["G..........."])
    assert glass.is_solvable()
    assert glass.is_solved()

    print("  [PASS] Solvability tests")


def test_board_without_erasable_tiles():
    """A board of only walls, background and floor is solved with no moves."""
    banner("Nothing To Clear")

    rows = ["PPPPPPPPPPPP"] + ["P#........#P"] * 10 + ["P##########P"]
    board = BoardState.from_rows(rows)

    for name in get_strategy_names():
        solution = create_strategy(name).solve(SolutionContext(board=board))
        assert solution.solved
        assert solution.moves == []
        assert solution.final_board == board
        assert solution.metrics.boards_examined == 0

    print("  [PASS] Nothing to clear tests")


def test_level_93():
    """The documented sample level is solved and the path replays."""
    banner("Level 93")

    board = BoardState.from_text(LEVEL_93)
    start = time.perf_counter()
    solution = create_strategy("bfs").solve(SolutionContext(board=board))
    elapsed = (time.perf_counter() - start) * 1000

    print(f"  Solve time: {elapsed:.1f}ms")
    print(f"  Boards analysed: {solution.metrics.boards_examined}")
    print(f"  Solution: {[str(m) for m in solution.moves]}")

    assert solution.solved
    assert solution.moves
    assert solution.final_board.is_solved()
    assert solution.metrics.strategy_name == "bfs"
    assert solution.metrics.states_visited >= solution.metrics.boards_examined

    # Replay reproduces the solved board exactly
    boards = replay_moves(board, solution.moves)
    assert len(boards) == len(solution.moves) + 1
    assert boards[0] == board
    assert boards[-1].grid == solution.final_board.grid
    assert boards[-1].erasable_count() == 0
    assert solution.board_states == boards
    assert solution.get_board_after_move(len(solution.moves) - 1) == boards[-1]
    for before, move in zip(boards, solution.moves):
        assert is_legal_move(before, move)

    print("  [PASS] Level 93 tests")


def test_parallel_matches_serial():
    """Threaded level expansion finds the same solution as plain BFS."""
    banner("Parallel BFS")

    board = BoardState.from_text(LEVEL_93)
    serial = create_strategy("bfs").solve(SolutionContext(board=board))
    parallel = create_strategy("parallel_bfs", workers=3).solve(SolutionContext(board=board))

    print(f"  Serial: {serial.metrics.boards_examined} boards, parallel: {parallel.metrics.boards_examined}")
    assert parallel.solved
    assert parallel.moves == serial.moves
    assert parallel.metrics.boards_examined == serial.metrics.boards_examined
    assert parallel.metrics.strategy_name == "parallel_bfs"

    with pytest.raises(ValueError):
        ParallelBreadthFirstStrategy(workers=0)

    print("  [PASS] Parallel BFS tests")


def test_context_limits():
    """Cancellation, timeout and the state cap stop the search."""
    banner("Context Limits")

    board = BoardState.from_text(LEVEL_93)

    for name in get_strategy_names():
        cancelled = SolutionContext(board=board)
        cancelled.cancel()
        solution = create_strategy(name).solve(cancelled)
        assert not solution.solved
        assert solution.was_cancelled
        assert not solution.exhausted

        timed_out = SolutionContext(board=board, timeout_sec=0.0, start_time=time.time() - 1)
        assert timed_out.remaining_time() < 0
        solution = create_strategy(name).solve(timed_out)
        assert solution.was_cancelled

        capped = SolutionContext(board=board, max_states=1)
        solution = create_strategy(name).solve(capped)
        assert not solution.solved
        assert solution.limit_reached
        assert not solution.exhausted

    assert SolutionContext(board=board).remaining_time() is None

    print("  [PASS] Context limit tests")


def cancel_on_count(context: SolutionContext, target: int):
    """Progress callback that cancels context once target boards were examined."""
    def callback(count: int, message: str) -> None:
        if count == target:
            context.cancel()
    return callback


def test_limits_apply_between_boards():
    """Both strategies stop at the board where the cancel or the cap happens."""
    banner("Limits Between Boards")

    board = BoardState.from_text(LEVEL_93)

    for cancel_at in (2, 5):
        for name in get_strategy_names():
            context = SolutionContext(board=board, progress_interval=1)
            context.progress_callback = cancel_on_count(context, cancel_at)
            solution = create_strategy(name).solve(context)
            print(f"  {name}: cancel at {cancel_at}, examined {solution.metrics.boards_examined}")
            assert solution.metrics.boards_examined == cancel_at
            assert solution.was_cancelled or solution.solved

    for cap in (10, 40):
        serial = create_strategy("bfs").solve(SolutionContext(board=board, max_states=cap))
        parallel = create_strategy("parallel_bfs", workers=2).solve(SolutionContext(board=board, max_states=cap))
        print(f"  Cap {cap}: bfs visited {serial.metrics.states_visited}, parallel {parallel.metrics.states_visited}")
        assert parallel.metrics.states_visited == serial.metrics.states_visited
        assert parallel.metrics.boards_examined == serial.metrics.boards_examined
        assert parallel.limit_reached == serial.limit_reached
        assert parallel.solved == serial.solved

    print("  [PASS] Limits between boards tests")


def test_progress_reporting():
    """Progress callback fires every progress_interval boards."""
    banner("Progress Reporting")

    board = BoardState.from_text(LEVEL_93)
    reports = []
    context = SolutionContext(
        board=board,
        progress_interval=1,
        progress_callback=lambda count, message: reports.append((count, message)),
    )
    solution = create_strategy("bfs").solve(context)

    assert solution.solved
    assert [count for count, _ in reports] == list(range(1, solution.metrics.boards_examined + 1))
    assert "boards analysed" in reports[0][1]

    print("  [PASS] Progress reporting tests")


def test_strategy_factory():
    """Strategies are looked up by name."""
    banner("Strategy Factory")

    names = get_strategy_names()
    print(f"  Strategies: {names}")
    assert "bfs" in names and "parallel_bfs" in names
    assert get_default_strategy_name() == "bfs"

    with pytest.raises(ValueError):
        create_strategy("greedy")

    # Constructor options are picked out of settings
    settings = {"strategy_name": "parallel_bfs", "workers": 2, "max_states": None}
    assert strategy_options("parallel_bfs", settings) == {"workers": 2}
    assert strategy_options("bfs", settings) == {}
    assert get_strategy_class("parallel_bfs") is ParallelBreadthFirstStrategy
    assert create_strategy("parallel_bfs", **strategy_options("parallel_bfs", settings)).workers == 2

    # Names are unique
    with pytest.raises(ValueError):
        @register_strategy
        class Impostor(BreadthFirstStrategy):
            name = "bfs"
    assert get_strategy_class("bfs") is BreadthFirstStrategy

    print("  [PASS] Strategy factory tests")


def main():
    """Run all tests."""
    print("\n" + "#" * 60)
    print("# SOLVER VALIDATION TESTS")
    print("#" * 60)

    tests = [
        test_board_state,
        test_board_keys_ignore_history,
        test_level_validation,
        test_move_generation,
        test_illegal_moves,
        test_gravity_pass,
        test_removal_pass,
        test_apply_move_chain,
        test_two_tiles_cleared_by_one_move,
        test_stabilization_idempotent,
        test_tiles_conserved,
        test_solvability_check,
        test_board_without_erasable_tiles,
        test_level_93,
        test_parallel_matches_serial,
        test_context_limits,
        test_limits_apply_between_boards,
        test_progress_reporting,
        test_strategy_factory,
    ]

    failed = []
    for test in tests:
        try:
            test()
        except AssertionError as e:
            print(f"  [FAIL] {test.__name__}: {e}")
            failed.append(test.__name__)

    print("\n" + "=" * 60)
    print("SUMMARY")
    print("=" * 60)
    if failed:
        print(f"Some tests FAILED: {', '.join(failed)}")
        return 1
    print("All tests PASSED!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
