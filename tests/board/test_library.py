from __future__ import annotations

import io
import logging
from pathlib import Path

import pytest

from sokogen import config
from sokogen.board import MalformedTemplateError, TemplateLibrary, load_fragments
from tests.helpers import ALL_WALL_ROWS, CELL_ROWS, LEFT_CORRIDOR_ROWS, make_fragment

TWO_BLOCKS = "\n".join([*ALL_WALL_ROWS, "", *LEFT_CORRIDOR_ROWS]) + "\n"


class TestLoadFragments:
    def test_blocks_in_file_order(self) -> None:
        fragments = load_fragments(TWO_BLOCKS)
        assert [f.library_index for f in fragments] == [0, 1]
        assert fragments[0].rows() == list(ALL_WALL_ROWS)
        assert fragments[1].rows() == list(LEFT_CORRIDOR_ROWS)

    def test_loaded_fragments_are_read_only(self) -> None:
        fragments = load_fragments(TWO_BLOCKS)
        assert all(f.frozen for f in fragments)

    def test_accepts_streams_and_line_lists(self) -> None:
        from_stream = load_fragments(io.StringIO(TWO_BLOCKS))
        from_lines = load_fragments(TWO_BLOCKS.splitlines(keepends=True))
        assert [f.rows() for f in from_stream] == [f.rows() for f in from_lines]

    def test_extra_blank_lines_are_ignored(self) -> None:
        text = "\n\n" + "\n".join(ALL_WALL_ROWS) + "\n\n\n" + "\n".join(CELL_ROWS)
        assert len(load_fragments(text)) == 2

    def test_blocks_need_no_separator(self) -> None:
        text = "\n".join([*ALL_WALL_ROWS, *CELL_ROWS])
        assert len(load_fragments(text)) == 2

    def test_windows_line_endings(self) -> None:
        text = "\r\n".join(LEFT_CORRIDOR_ROWS) + "\r\n"
        (fragment,) = load_fragments(io.StringIO(text, newline=""))
        assert fragment.rows() == list(LEFT_CORRIDOR_ROWS)

    def test_row_of_spaces_is_open_floor(self) -> None:
        text = "\n".join(["#####", "     ", "#####", "#   #", "#####"])
        (fragment,) = load_fragments(text)
        assert fragment.rows()[1] == "     "

    def test_custom_side(self) -> None:
        (fragment,) = load_fragments("###\n# #\n###\n", side=3)
        assert fragment.side == 3

    def test_empty_text_gives_no_fragments(self) -> None:
        assert load_fragments("") == []

    def test_wrong_row_width(self) -> None:
        text = "#####\n####\n"
        with pytest.raises(MalformedTemplateError, match="line 2") as exc_info:
            load_fragments(text)
        assert exc_info.value.line_number == 2

    def test_blank_line_inside_block(self) -> None:
        text = "#####\n#####\n\n#####\n#####\n#####\n"
        with pytest.raises(MalformedTemplateError) as exc_info:
            load_fragments(text)
        assert exc_info.value.line_number == 3

    def test_text_ends_inside_block(self) -> None:
        text = "\n".join([*ALL_WALL_ROWS, "", "#####", "#####"])
        with pytest.raises(MalformedTemplateError, match="ended") as exc_info:
            load_fragments(text)
        assert exc_info.value.line_number == 8

    def test_malformed_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            load_fragments("##\n")


class TestTemplateLibrary:
    def test_empty_library_rejected(self) -> None:
        with pytest.raises(ValueError, match="at least one"):
            TemplateLibrary([])

    def test_mixed_sides_rejected(self) -> None:
        small = make_fragment(("###", "# #", "###"))
        with pytest.raises(ValueError, match="side"):
            TemplateLibrary([make_fragment(ALL_WALL_ROWS), small])

    def test_fragments_are_reindexed_and_frozen(self) -> None:
        source = make_fragment(CELL_ROWS, index=42)
        library = TemplateLibrary([make_fragment(ALL_WALL_ROWS), source])
        assert [f.library_index for f in library] == [0, 1]
        assert all(f.frozen for f in library)
        # The caller's fragment is neither frozen nor retagged
        assert not source.frozen
        assert source.library_index == 42

    def test_sequence_protocol(self) -> None:
        library = TemplateLibrary.from_text(TWO_BLOCKS)
        assert len(library) == 2
        assert library[1].rows() == list(LEFT_CORRIDOR_ROWS)
        assert library.side == 5
        assert "2 fragments" in repr(library)

    def test_from_text_with_no_blocks(self) -> None:
        with pytest.raises(ValueError):
            TemplateLibrary.from_text("\n\n")

    def test_from_path(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        path = tmp_path / "templates.txt"
        path.write_text(TWO_BLOCKS, encoding="utf-8")

        with caplog.at_level(logging.INFO, logger="sokogen.board.library"):
            library = TemplateLibrary.from_path(path)

        assert len(library) == 2
        assert library.origin == str(path)
        assert "Loaded 2 templates" in caplog.text

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            TemplateLibrary.from_path(tmp_path / "missing.txt")

    def test_default_library_ships_with_package(self) -> None:
        library = TemplateLibrary.default()
        assert config.DEFAULT_TEMPLATES_PATH.is_file()
        assert len(library) == 16
        assert library.side == config.FRAGMENT_SIDE
        assert library.origin == str(config.DEFAULT_TEMPLATES_PATH)
