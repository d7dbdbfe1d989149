"""Unit tests for the session controller."""
from hypothesis import given
from hypothesis import strategies as st

from chatterm.chat import Message, Role
from chatterm.config import RequestPolicy, Settings
from chatterm.llm import CompletionResult, ServiceError, TransportError
from chatterm.session import (
    PLACEHOLDER_ENTRIES,
    WELCOME_MESSAGE,
    DispatchCompletion,
    KeyPress,
    Mode,
    PlainRenderer,
    QuitSession,
    RequestScheduler,
    SessionController,
    Transcript,
    TranscriptStyle,
)


def type_text(controller: SessionController, text: str) -> list:
    effects = []
    for character in text:
        effects.extend(controller.on_key(KeyPress.char(character)))
    return effects


def send(controller: SessionController, text: str) -> list:
    type_text(controller, text)
    return controller.on_key(KeyPress("enter"))


def make_controller(**kwargs) -> SessionController:
    transcript = Transcript(
        [Message.assistant(WELCOME_MESSAGE)],
        renderer=PlainRenderer(),
        style=TranscriptStyle(width=40, show_timestamp=False),
    )
    return SessionController(transcript=transcript, **kwargs)


class TestConversation:
    """Tests for the submit and reply round trip."""

    def test_submit_appends_and_dispatches(self, controller):
        """Test the welcome message followed by 'hello' and a reply."""
        effects = send(controller, "hello")

        assert len(effects) == 1
        assert isinstance(effects[0], DispatchCompletion)
        history = effects[0].request.history
        assert [(m.role, m.content) for m in history] == [
            (Role.ASSISTANT, WELCOME_MESSAGE),
            (Role.USER, "hello"),
        ]
        assert controller.input_buffer.text == ""
        assert controller.scheduler.pending == 1

        assert controller.on_completion_result(CompletionResult.success("hi there")) == []

        messages = controller.transcript.messages
        assert len(messages) == 3
        assert messages[-1].role == Role.ASSISTANT
        assert messages[-1].content == "hi there"
        assert controller.scheduler.pending == 0

    def test_whitespace_submit_is_noop(self, controller):
        effects = send(controller, "  ")

        assert effects == []
        assert len(controller.transcript) == 1
        assert controller.input_buffer.text == "  "

    @given(st.text(alphabet=" \t", max_size=10))
    def test_blank_input_never_dispatches(self, text: str):
        """Property test: whitespace-only input schedules nothing."""
        controller = make_controller()
        controller.input_buffer.insert(text)

        assert controller.on_key(KeyPress("enter")) == []
        assert controller.scheduler.pending == 0

    def test_failure_appends_one_error_message(self, controller):
        send(controller, "hello")

        controller.on_completion_result(
            CompletionResult.failure(ServiceError(401, message="Invalid key"))
        )

        messages = controller.transcript.messages
        assert len(messages) == 3
        assert messages[-1].role == Role.ASSISTANT
        assert messages[-1].content.startswith("Error: API error: Invalid key")
        assert controller.mode is Mode.NORMAL

    def test_failure_while_focused_keeps_mode(self, controller):
        send(controller, "hello")
        controller.on_key(KeyPress("escape"))

        controller.on_completion_result(CompletionResult.failure(TransportError("refused")))

        assert controller.mode is Mode.FOCUSED
        assert controller.transcript.focus == 2
        assert controller.transcript.messages[-1].content == "Error: refused"


class TestScheduling:
    """Tests for overlapping submissions."""

    def test_serial_policy_queues_with_submission_snapshot(self):
        controller = make_controller()
        first = send(controller, "one")
        second = send(controller, "two")

        assert len(first) == 1
        assert second == []
        assert controller.scheduler.pending == 2

        effects = controller.on_completion_result(CompletionResult.success("reply"))

        assert len(effects) == 1
        queued = effects[0].request.history
        assert [m.content for m in queued] == [WELCOME_MESSAGE, "one", "two"]

    def test_concurrent_policy_dispatches_everything(self):
        controller = make_controller(scheduler=RequestScheduler(RequestPolicy.CONCURRENT))

        assert len(send(controller, "one")) == 1
        assert len(send(controller, "two")) == 1
        assert controller.scheduler.in_flight == 2


class TestModes:
    """Tests for mode transitions and key routing."""

    def test_quit_from_any_mode(self, controller):
        assert controller.on_key(KeyPress("ctrl+c")) == [QuitSession()]
        controller.on_key(KeyPress("ctrl+f"))
        assert controller.on_key(KeyPress("ctrl+c")) == [QuitSession()]

    def test_escape_enters_and_leaves_focus(self, controller):
        controller.on_key(KeyPress("escape"))
        assert controller.mode is Mode.FOCUSED
        assert controller.transcript.focus == 0

        controller.on_key(KeyPress("escape"))
        assert controller.mode is Mode.NORMAL
        assert controller.transcript.focus is None

    def test_focused_mode_does_not_edit_input(self, controller):
        controller.on_key(KeyPress("escape"))
        type_text(controller, "jk")
        controller.on_key(KeyPress("enter"))

        assert controller.input_buffer.text == ""
        assert len(controller.transcript) == 1

    def test_finder_toggle(self, controller):
        controller.on_key(KeyPress("ctrl+f"))

        assert controller.mode is Mode.FINDER
        assert controller.finder.entries == PLACEHOLDER_ENTRIES

        controller.on_key(KeyPress("down"))
        type_text(controller, "abc")
        assert controller.finder.cursor == 1
        assert controller.input_buffer.text == ""

        controller.on_key(KeyPress("ctrl+f"))
        assert controller.mode is Mode.NORMAL

    def test_finder_from_focus_clears_highlight(self, controller):
        controller.on_key(KeyPress("escape"))
        controller.on_key(KeyPress("ctrl+f"))

        assert controller.mode is Mode.FINDER
        assert controller.transcript.focus is None

        controller.on_key(KeyPress("ctrl+f"))
        assert controller.mode is Mode.NORMAL

    def test_focus_on_reply(self):
        controller = make_controller(focus_on_reply=True)
        send(controller, "hello")

        controller.on_completion_result(CompletionResult.success("hi"))

        assert controller.mode is Mode.FOCUSED
        assert controller.transcript.focus == 2

    def test_normal_mode_scroll_keys(self):
        controller = make_controller()
        controller.on_resize(40, 4)
        for index in range(4):
            controller.transcript.append(Message.assistant(f"m{index}"))
        bottom = controller.transcript.scroll_offset

        controller.on_key(KeyPress("up"))
        assert controller.transcript.scroll_offset == bottom - 1

        controller.on_scroll(-1)
        assert controller.transcript.scroll_offset == bottom - 4


class TestInput:
    """Tests for input limits, paste and resize."""

    def test_char_limit_blocks_typing(self):
        controller = make_controller(input_char_limit=3)
        type_text(controller, "abcd")
        assert controller.input_buffer.text == "abc"

    def test_paste_folds_newlines_and_truncates(self):
        controller = make_controller(input_char_limit=10)
        controller.on_paste("line one\nline two")
        assert controller.input_buffer.text == "line one l"

    def test_paste_ignored_outside_normal_mode(self, controller):
        controller.on_key(KeyPress("ctrl+f"))
        controller.on_paste("hello")
        assert controller.input_buffer.text == ""

    def test_resize_reserves_input_row(self, controller):
        controller.on_resize(60, 20)

        assert controller.transcript.viewport == (60, 19)
        assert controller.input_buffer.width == 60
        assert controller.finder.size == (60, 20)

    def test_resize_keeps_minimum_transcript_height(self, controller):
        controller.on_resize(60, 2)
        assert controller.transcript.viewport == (60, 5)


def test_from_settings():
    settings = Settings.model_validate(
        {"llm": {"request_policy": "concurrent"}, "ui": {"input_char_limit": 2}}
    )
    controller = SessionController.from_settings(settings, renderer=PlainRenderer())

    assert controller.scheduler.policy is RequestPolicy.CONCURRENT
    assert controller.transcript.messages[0].content == WELCOME_MESSAGE
    type_text(controller, "abc")
    assert controller.input_buffer.text == "ab"
