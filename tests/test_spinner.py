from __future__ import annotations

import io
import time

import allure
import pytest

from sourced.web.spinner import ASCII_CHARSET, BRAILLE_CHARSET, Spinner, start_spinner

pytestmark = [
    allure.epic("Web UI"),
    allure.feature("Terminal Spinner"),
]


def test_start_then_stop_prints_final_message_once() -> None:
    stream = io.StringIO()
    spinner = Spinner("Initializing...", stream=stream)

    spinner.start()
    spinner.stop()

    output = stream.getvalue()
    assert output.endswith("Initializing...\n")
    assert output.count("Initializing...\n") == 1
    assert spinner._thread is not None
    assert not spinner._thread.is_alive()


def test_stop_twice_is_rejected() -> None:
    spinner = Spinner("Initializing...", stream=io.StringIO())
    spinner.start()
    spinner.stop()

    with pytest.raises(RuntimeError, match="already stopped"):
        spinner.stop()


def test_stop_without_start_is_rejected() -> None:
    with pytest.raises(RuntimeError, match="not started"):
        Spinner("Initializing...", stream=io.StringIO()).stop()


def test_no_frames_after_stop() -> None:
    stream = io.StringIO()
    spinner = Spinner("Working", interval_seconds=0.01, stream=stream)
    spinner.start()
    time.sleep(0.05)
    spinner.stop()
    output_at_stop = stream.getvalue()

    time.sleep(0.05)

    assert stream.getvalue() == output_at_stop
    assert output_at_stop.endswith("Working\n")


def test_animation_cycles_through_charset() -> None:
    stream = io.StringIO()
    spinner = Spinner(
        "Working",
        charset=("a", "b"),
        interval_seconds=0.01,
        cursor_reposition=False,
        stream=stream,
    )
    spinner.start()
    time.sleep(0.1)
    spinner.stop()

    output = stream.getvalue()
    assert "\rWorking a" in output
    assert "\rWorking b" in output


def test_render_frame_with_cursor_reposition() -> None:
    spinner = Spinner("Working", cursor_reposition=True)

    assert spinner.charset == BRAILLE_CHARSET
    assert spinner.render_frame(0) == "Working ⠋\n\033[A"
    assert spinner.render_frame(len(BRAILLE_CHARSET) + 1) == "Working ⠙\n\033[A"


def test_render_frame_with_carriage_return() -> None:
    spinner = Spinner("Working", cursor_reposition=False)

    assert spinner.charset == ASCII_CHARSET
    assert spinner.render_frame(0) == "\rWorking |"
    assert spinner.render_frame(3) == "\rWorking \\"


def test_empty_charset_is_rejected() -> None:
    with pytest.raises(ValueError, match="charset"):
        Spinner("Working", charset=())


def test_start_spinner_returns_stop_callable() -> None:
    stream = io.StringIO()

    stop = start_spinner("Loading", stream=stream, interval_seconds=0.01)
    stop()

    assert stream.getvalue().endswith("Loading\n")
