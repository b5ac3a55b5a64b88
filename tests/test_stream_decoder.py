import json

import pytest

from relay.bot.stream_decoder import StreamDecoder


def sse_line(content=None, **extra):
    """Build one `data:` record the way the chat completions stream sends it."""
    delta = {} if content is None else {"content": content}
    record = {"id": "chatcmpl-1", "choices": [{"index": 0, "delta": delta, **extra}]}
    return f"data: {json.dumps(record, ensure_ascii=False)}\n\n"


def sample_stream():
    pieces = ["こん", "にちは", "。", "元気", "？"]
    body = 'data: {"choices": [{"index": 0, "delta": {"role": "assistant"}}]}\n\n'
    body += "".join(sse_line(piece) for piece in pieces)
    body += sse_line(None, finish_reason="stop")
    body += "data: [DONE]\n\n"
    return pieces, body.encode("utf-8")


def decode_in_chunks(payload: bytes, size: int):
    decoder = StreamDecoder()
    tokens = []
    for start in range(0, len(payload), size):
        tokens.extend(decoder.feed(payload[start:start + size]))
    decoder.finish()
    return decoder, tokens


def test_single_chunk():
    pieces, payload = sample_stream()
    decoder, tokens = decode_in_chunks(payload, len(payload))
    assert tokens == pieces
    assert decoder.done


@pytest.mark.parametrize("size", [1, 2, 3, 5, 7, 13, 64])
def test_chunk_boundaries_do_not_change_tokens(size):
    pieces, payload = sample_stream()
    decoder, tokens = decode_in_chunks(payload, size)
    assert tokens == pieces
    assert "�" not in "".join(tokens)


def test_multibyte_character_split_across_chunks():
    payload = sse_line("日本").encode("utf-8")
    split_at = payload.index("日".encode("utf-8")) + 1

    decoder = StreamDecoder()
    assert decoder.feed(payload[:split_at]) == []
    assert decoder.feed(payload[split_at:]) == ["日本"]


def test_done_sentinel_produces_no_token():
    decoder = StreamDecoder()
    assert decoder.feed(b"data: [DONE]\n\n") == []
    assert decoder.done


def test_ignores_blank_and_foreign_lines():
    decoder = StreamDecoder()
    payload = (": keep-alive\n\nevent: message\nid: 3\n\n" + sse_line("はい")).encode("utf-8")
    assert decoder.feed(payload) == ["はい"]
    assert decoder.skipped_lines == 0


def test_malformed_record_is_skipped():
    decoder = StreamDecoder()
    payload = ("data: {not json\n\n" + sse_line("続き")).encode("utf-8")
    assert decoder.feed(payload) == ["続き"]
    assert decoder.skipped_lines == 1


def test_records_without_content_are_ignored():
    decoder = StreamDecoder()
    payload = (
        sse_line(None, finish_reason="stop")
        + 'data: {"choices": []}\n\n'
        + sse_line("")
    ).encode("utf-8")
    assert decoder.feed(payload) == []
    assert decoder.skipped_lines == 0


def test_crlf_line_endings():
    decoder = StreamDecoder()
    payload = sse_line("はい").replace("\n", "\r\n").encode("utf-8")
    assert decoder.feed(payload) == ["はい"]


def test_unterminated_last_line_is_dropped_on_finish():
    decoder = StreamDecoder()
    payload = sse_line("一").encode("utf-8") + b'data: {"choices": [{"delta": {"content": "x"}}]}'
    assert decoder.feed(payload) == ["一"]
    decoder.finish()
    assert decoder.feed(b"\n") == []
