import io
from pathlib import Path

import pytest
from hypothesis import given
from hypothesis import strategies as st

from chunkgrep.exceptions import FileNotFoundError as ChunkGrepFileNotFoundError
from chunkgrep.exceptions import PlanningError
from chunkgrep.search.planner import candidate_offsets, plan_chunks, plan_file
from chunkgrep.search.types import Chunk


def _plan(data: bytes, worker_count: int) -> list[Chunk]:
    return plan_chunks(io.BytesIO(data), len(data), worker_count)


def _assert_valid_plan(data: bytes, chunks: list[Chunk], worker_count: int) -> None:
    assert len(chunks) == worker_count
    assert [chunk.index for chunk in chunks] == list(range(worker_count))
    assert chunks[0].start == 0
    assert chunks[-1].end == len(data)
    for previous, current in zip(chunks, chunks[1:]):
        assert previous.end == current.start
    for chunk in chunks:
        assert chunk.start <= chunk.end
        if chunk.start > 0 and not chunk.is_empty:
            assert data[chunk.start - 1 : chunk.start] == b"\n"


@pytest.mark.unit
@pytest.mark.search
class TestCandidateOffsets:
    def test_even_split(self) -> None:
        assert candidate_offsets(100, 4) == [25, 50, 75]

    def test_single_worker_has_no_split_points(self) -> None:
        assert candidate_offsets(100, 1) == []

    def test_rejects_zero_workers(self) -> None:
        with pytest.raises(PlanningError) as exc_info:
            candidate_offsets(10, 0)

        assert exc_info.value.parameter_name == "worker_count"

    def test_rejects_negative_length(self) -> None:
        with pytest.raises(PlanningError):
            candidate_offsets(-1, 2)


@pytest.mark.unit
@pytest.mark.search
class TestPlanChunks:
    def test_boundaries_move_past_next_newline(self) -> None:
        data = b"aaaa\nbbbb\ncccc\ndddd\n"

        chunks = _plan(data, 2)

        # candidate 10 sits at the start of "cccc" and moves past its newline
        assert chunks == [Chunk(0, 0, 15), Chunk(1, 15, 20)]

    def test_single_worker_covers_everything(self) -> None:
        data = b"one\ntwo\n"

        assert _plan(data, 1) == [Chunk(0, 0, len(data))]

    def test_empty_file_yields_empty_chunks(self) -> None:
        chunks = _plan(b"", 3)

        assert len(chunks) == 3
        assert all(chunk.is_empty for chunk in chunks)

    def test_more_workers_than_lines_keeps_empty_chunks(self) -> None:
        data = b"a\nb\n"

        chunks = _plan(data, 8)

        _assert_valid_plan(data, chunks, 8)
        assert sum(not chunk.is_empty for chunk in chunks) <= 2

    def test_no_trailing_newline(self) -> None:
        data = b"first line\nsecond line without newline"

        chunks = _plan(data, 3)

        _assert_valid_plan(data, chunks, 3)

    def test_long_line_spans_scan_blocks(self) -> None:
        data = b"x" * 10_000 + b"\nshort\n"

        chunks = _plan(data, 2)

        assert chunks[0] == Chunk(0, 0, 10_001)
        assert chunks[1] == Chunk(1, 10_001, len(data))

    @given(
        lines=st.lists(st.text(alphabet="ab \r", max_size=12), max_size=40),
        trailing=st.booleans(),
        worker_count=st.integers(min_value=1, max_value=12),
    )
    def test_plan_properties(self, lines: list[str], trailing: bool, worker_count: int) -> None:
        data = "\n".join(lines).encode("utf-8")
        if trailing and data:
            data += b"\n"

        _assert_valid_plan(data, _plan(data, worker_count), worker_count)


@pytest.mark.unit
@pytest.mark.search
class TestPlanFile:
    def test_plans_from_disk(self, tmp_path: Path) -> None:
        path = tmp_path / "input.txt"
        path.write_bytes(b"aaaa\nbbbb\ncccc\ndddd\n")

        assert plan_file(path, 2) == [Chunk(0, 0, 15), Chunk(1, 15, 20)]

    def test_planning_is_repeatable(self, large_file: Path) -> None:
        assert plan_file(large_file, 7) == plan_file(large_file, 7)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ChunkGrepFileNotFoundError) as exc_info:
            plan_file(tmp_path / "missing.txt", 2)

        assert exc_info.value.file_path.endswith("missing.txt")
