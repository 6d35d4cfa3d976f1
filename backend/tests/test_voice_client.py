import pytest


@pytest.mark.parametrize(
    "error, expected",
    [
        ({"message": "Meeting has ended due to ejection"}, "ejection"),
        ({"message": "Permission denied by the user"}, "permission"),
        ({"message": "NETWORK connection lost"}, "network"),
        ({"message": "something odd"}, "unclassified"),
        ({"message": "permission lost after network ejection"}, "ejection"),
        ({"kind": "network", "message": "permission denied"}, "network"),
        ({"kind": "bogus", "message": "permission denied"}, "permission"),
        ("network down", "network"),
    ],
)
def test_classify_voice_error(error, expected):
    from mockinterview.call.voice_client import classify_voice_error

    assert classify_voice_error(error).value == expected


@pytest.mark.asyncio
async def test_relay_session_sends_commands_and_dispatches_events():
    from mockinterview.call import voice_client as events
    from mockinterview.call.voice_client import RelayVoiceSession

    sent = []

    async def _send(payload):
        sent.append(payload)

    relay = RelayVoiceSession(send_fn=_send)
    received = []
    relay.on(events.MESSAGE, received.append)

    await relay.start({"assistantId": "a1"})
    await relay.stop()
    assert sent == [{"type": "start", "config": {"assistantId": "a1"}}, {"type": "stop"}]

    assert relay.dispatch({"event": "message", "data": {"type": "transcript"}}) is True
    assert relay.dispatch({"event": "volume-level", "data": {}}) is False
    assert received == [{"type": "transcript"}]


def test_handler_errors_do_not_stop_other_handlers():
    from mockinterview.call import voice_client as events
    from mockinterview.call.voice_client import VoiceSessionClient

    client = VoiceSessionClient()
    calls = []

    def _broken(_payload):
        raise RuntimeError("boom")

    client.on(events.CALL_END, _broken)
    client.on(events.CALL_END, calls.append)
    client.emit(events.CALL_END, {"reason": "done"})

    assert calls == [{"reason": "done"}]

    client.off(events.CALL_END, calls.append)
    client.emit(events.CALL_END)
    assert len(calls) == 1


def test_unknown_event_subscription_rejected():
    from mockinterview.call.voice_client import VoiceSessionClient

    with pytest.raises(ValueError):
        VoiceSessionClient().on("volume-level", lambda _payload: None)
