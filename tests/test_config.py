import dataclasses

import pytest

from linekit.config import (
    BellStyle,
    Builder,
    ColorMode,
    CompletionType,
    Config,
    EditMode,
    HistoryDuplicates,
    OutputStreamType,
)


def test_defaults():
    config = Config()
    assert config.max_history_size == 100
    assert config.history_duplicates is HistoryDuplicates.IGNORE_CONSECUTIVE
    assert config.history_ignore_space is False
    assert config.completion_type is CompletionType.CIRCULAR
    assert config.completion_prompt_limit == 100
    assert config.keyseq_timeout == -1
    assert config.edit_mode is EditMode.EMACS
    assert config.auto_add_history is False
    assert config.color_mode is ColorMode.ENABLED
    assert config.output_stream is OutputStreamType.STDOUT
    assert config.tab_stop == 8
    assert config.indent_size == 2
    assert config.check_cursor_position is False
    assert config.enable_bracketed_paste is True
    assert config.bell_style is BellStyle.default()


def test_builder_without_changes_equals_default():
    assert Config.builder().build() == Config()


def test_builder_returns_builder():
    builder = Config.builder()
    assert isinstance(builder, Builder)
    assert builder.tab_stop(4) is builder


def test_history_ignore_space():
    config = Config.builder().history_ignore_space(True).build()
    assert config.history_ignore_space is True


@pytest.mark.parametrize(
    "yes, expected",
    [(True, HistoryDuplicates.IGNORE_CONSECUTIVE), (False, HistoryDuplicates.ALWAYS_ADD)],
)
def test_history_ignore_dups(yes, expected):
    assert Config.builder().history_ignore_dups(yes).build().history_duplicates is expected


def test_edit_mode_vi_sets_timeout():
    config = Config.builder().edit_mode(EditMode.VI).build()
    assert config.edit_mode is EditMode.VI
    assert config.keyseq_timeout == 500


def test_edit_mode_emacs_resets_timeout():
    config = Config.builder().keyseq_timeout(250).edit_mode(EditMode.EMACS).build()
    assert config.keyseq_timeout == -1


def test_keyseq_timeout_after_edit_mode_wins():
    config = Config.builder().edit_mode(EditMode.VI).keyseq_timeout(42).build()
    assert config.keyseq_timeout == 42
    assert config.edit_mode is EditMode.VI


def test_chained_settings():
    config = (
        Config.builder()
        .max_history_size(10)
        .completion_type(CompletionType.LIST)
        .completion_prompt_limit(20)
        .auto_add_history(True)
        .bell_style(BellStyle.VISIBLE)
        .color_mode(ColorMode.DISABLED)
        .output_stream(OutputStreamType.STDERR)
        .tab_stop(4)
        .check_cursor_position(True)
        .indent_size(3)
        .bracketed_paste(False)
        .build()
    )
    assert config.max_history_size == 10
    assert config.completion_type is CompletionType.LIST
    assert config.completion_prompt_limit == 20
    assert config.auto_add_history is True
    assert config.bell_style is BellStyle.VISIBLE
    assert config.color_mode is ColorMode.DISABLED
    assert config.output_stream is OutputStreamType.STDERR
    assert config.tab_stop == 4
    assert config.check_cursor_position is True
    assert config.indent_size == 3
    assert config.enable_bracketed_paste is False


def test_built_config_is_not_changed_by_later_calls():
    builder = Config.builder().tab_stop(4)
    first = builder.build()
    builder.tab_stop(2)
    assert first.tab_stop == 4
    assert builder.build().tab_stop == 2


def test_config_is_immutable():
    config = Config()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.tab_stop = 3
    assert config.tab_stop == 8