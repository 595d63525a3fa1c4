import asyncio

import pytest

from ask_gemini.controller import COOLDOWN_SECONDS, PromptController, RequestState
from ask_gemini.llm import CompletionError
from ask_gemini.prompts import DEFAULT_PROMPT, ERROR_MESSAGE


def test_initial_state_is_idle():
    state = RequestState()
    assert state.phase == "idle"
    assert state.can_submit
    assert state.button_label == "Submit"


@pytest.mark.parametrize(
    "loading,submitted,can_submit,label",
    [
        (True, True, False, "Processing..."),
        (False, True, False, "✓ Submitted"),
        (True, False, False, "Processing..."),
        (False, False, True, "Submit"),
    ],
)
def test_submit_gate_and_label(loading, submitted, can_submit, label):
    state = RequestState(is_loading=loading, is_submitted=submitted)
    assert state.can_submit is can_submit
    assert state.button_label == label


@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["", "What is 2+2?"])
async def test_dispatch_enters_submitting_immediately(service, text):
    service.hold()
    controller = PromptController(service, cooldown=0.01)
    controller.state.error_text = "old error"
    controller.set_input(text)

    task = controller.dispatch()

    assert controller.state.phase == "submitting"
    assert controller.state.is_loading
    assert controller.state.is_submitted
    assert controller.state.error_text == ""

    service.release.set()
    await task


@pytest.mark.asyncio
async def test_empty_input_sends_default_prompt(service):
    controller = PromptController(service, cooldown=0.01)
    await controller.submit()
    assert service.prompts == [DEFAULT_PROMPT]


@pytest.mark.asyncio
async def test_user_input_is_sent_verbatim(service):
    controller = PromptController(service, cooldown=0.01)
    controller.set_input("What is 2+2?")
    await controller.submit()
    assert service.prompts == ["What is 2+2?"]


@pytest.mark.asyncio
async def test_success_sets_response(service):
    controller = PromptController(service, cooldown=0.01)
    await controller.submit()

    state = controller.state
    assert state.response_text == "AI is a field of..."
    assert state.error_text == ""
    assert not state.is_loading
    assert state.phase == "cooldown"


@pytest.mark.asyncio
async def test_failure_sets_generic_error_and_keeps_response(service, capsys):
    controller = PromptController(service, cooldown=0.01)
    controller.state.response_text = "previous answer"
    controller.set_input("What is 2+2?")
    service.error = CompletionError("quota exceeded for key abc123")

    await controller.submit()

    state = controller.state
    assert state.error_text == ERROR_MESSAGE
    assert state.response_text == "previous answer"
    assert not state.is_loading
    assert "quota exceeded" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_any_exception_is_masked(service):
    controller = PromptController(service, cooldown=0.01)
    service.error = ConnectionError("network down")
    await controller.submit()
    assert controller.state.error_text == ERROR_MESSAGE


@pytest.mark.asyncio
async def test_previous_response_kept_while_loading(service):
    controller = PromptController(service, cooldown=0.01)
    controller.state.response_text = "previous answer"
    service.hold()
    service.text = "new answer"

    task = controller.dispatch()
    await asyncio.sleep(0)
    assert controller.state.response_text == "previous answer"

    service.release.set()
    await task
    assert controller.state.response_text == "new answer"


@pytest.mark.asyncio
async def test_success_clears_error_from_previous_attempt(service):
    controller = PromptController(service, cooldown=0.01)
    service.error = RuntimeError("boom")
    await controller.submit()
    assert controller.state.error_text == ERROR_MESSAGE

    await asyncio.sleep(0.05)
    service.error = None
    await controller.submit()
    assert controller.state.error_text == ""
    assert controller.state.response_text == "AI is a field of..."


@pytest.mark.asyncio
async def test_cooldown_only_clears_submitted_flag(service):
    controller = PromptController(service, cooldown=0.05)
    controller.set_input("hello")
    controller.focus()
    await controller.submit()

    assert controller.state.is_submitted
    before = controller.state.model_copy()

    await asyncio.sleep(0.1)

    after = controller.state
    assert not after.is_submitted
    assert after.phase == "idle"
    assert after.model_dump(exclude={"is_submitted"}) == before.model_dump(
        exclude={"is_submitted"}
    )


@pytest.mark.asyncio
async def test_cooldown_not_cancelled_by_typing(service):
    controller = PromptController(service, cooldown=0.05)
    await controller.submit()
    controller.set_input("typing again")
    controller.blur()
    await asyncio.sleep(0.1)
    assert not controller.state.is_submitted


@pytest.mark.asyncio
async def test_cooldown_firing_when_idle_is_noop(service):
    controller = PromptController(service, cooldown=0.05)
    await controller.submit()
    controller._end_cooldown()
    assert not controller.state.is_submitted
    await asyncio.sleep(0.1)
    assert not controller.state.is_submitted
    assert controller.state.phase == "idle"


@pytest.mark.asyncio
async def test_close_cancels_inflight_request(service):
    controller = PromptController(service, cooldown=0.05)
    service.hold()
    task = controller.dispatch()
    await asyncio.sleep(0)

    controller.close()

    with pytest.raises(asyncio.CancelledError):
        await task
    await asyncio.sleep(0)

    assert controller._timers == []
    assert controller._tasks == set()
    assert not controller.state.is_loading
    assert controller.state.response_text == ""


@pytest.mark.asyncio
async def test_close_cancels_every_overlapping_dispatch(service):
    controller = PromptController(service, cooldown=0.05)
    service.hold()
    first = controller.dispatch()
    second = controller.dispatch()
    await asyncio.sleep(0)
    assert controller._tasks == {first, second}

    controller.close()
    await asyncio.gather(first, second, return_exceptions=True)
    await asyncio.sleep(0)

    assert first.cancelled()
    assert second.cancelled()
    assert controller._tasks == set()
    assert controller._timers == []


@pytest.mark.asyncio
async def test_finished_dispatch_is_forgotten(service):
    controller = PromptController(service, cooldown=0.01)
    await controller.dispatch()
    await asyncio.sleep(0)
    assert controller._tasks == set()


def test_default_cooldown_is_three_seconds(service):
    assert COOLDOWN_SECONDS == 3.0
    assert PromptController(service).cooldown == 3.0


@pytest.mark.asyncio
async def test_submitted_flag_holds_through_cooldown_window(service):
    controller = PromptController(service, cooldown=0.2)
    await controller.submit()

    await asyncio.sleep(0.1)
    assert controller.state.is_submitted
    assert not controller.state.can_submit

    await asyncio.sleep(0.2)
    assert not controller.state.is_submitted


def test_focus_and_blur():
    controller = PromptController(service=None)
    controller.focus()
    assert controller.state.is_focused
    controller.blur()
    assert not controller.state.is_focused
