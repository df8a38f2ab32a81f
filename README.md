# actorcall

Message-passing helpers for asyncio actors: fire-and-forget casts,
request/reply calls with timeouts, forwarding replies to another actor,
delayed and periodic sends, delayed stop and kill, and a compact big-endian
byte encoding for primitive message payloads.

## Installation

```
pip install actorcall
```

For running the tests:

```
pip install "actorcall[test]"
pytest
```

## What an actor is here

The package does not contain an actor runtime: there is nothing to spawn,
run, supervise or register actors. You bring your own actor object, and the
helpers work with it through a few methods:

- `send_message(msg)` queues a message, and raises
  `actorcall.rpc.MessagingError` when it cannot be delivered.
- `is_active()`, `stop(reason)` and `kill()` are used by the timers.

Everything runs on the running asyncio event loop.

## Call results

A call to an actor ends in one of three ways, told apart by
`actorcall.call_result.CallStatus` (`SUCCESS`, `TIMEOUT`, `SENDER_ERROR`)
and carried by `actorcall.call_result.CallResult`:

```python
from actorcall.call_result import CallResult

ok = CallResult.success(41)
ok.map(lambda v: v + 1).unwrap()           # 42
CallResult.timeout().unwrap_or(0)          # 0
CallResult.sender_error().is_send_error()  # True
```

- `unwrap()` and `expect(msg)` return the reply or raise `CallResultError`,
  whose `status` attribute holds the outcome.
- `unwrap_or(default)` and `unwrap_or_else(func)` fall back to a value.
- `success_or(error)` returns the reply or raises `error`;
  `success_or_else(func)` raises the exception that `func()` builds.
- `map(mapping)`, `map_or(default, mapping)` and
  `map_or_else(default, mapping)` transform a successful reply.

## Casting and calling

`actorcall.rpc` provides:

- `cast(actor, msg)` sends a message and returns at once.
- `await call(actor, msg_builder, timeout=None)` builds a message around a
  fresh `ReplyPort`, sends it and waits for the reply, giving a `CallResult`.
- `await multi_call(actors, msg_builder, timeout=None)` does the same for
  several actors at once and keeps their order in the returned list.
- `call_and_forward(actor, msg_builder, response_forward, forward_mapping, timeout=None)`
  sends the request and returns a task that waits for the reply and sends
  `forward_mapping(reply)` to `response_forward`. Nothing is forwarded if the
  call does not succeed; the task raises `MessagingError` if the forward fails.

A timeout is a number of seconds or a `datetime.timedelta`; `None` waits
without limit. A request that cannot be sent raises `MessagingError`.

Inside the actor, reply with `port.send(value)`; it raises `MessagingError`
if nobody is waiting anymore. `port.is_closed()` tells whether a reply was
already sent or the caller stopped waiting. A port discarded without a reply
gives the caller a sender-error result.

```python
from actorcall.rpc import call

result = await call(actor, lambda port: ("greet", port), timeout=0.1)
print(result.unwrap_or("no reply"))
```

## Timers

`actorcall.timers` schedules work against an actor in the background:

- `send_interval(period, actor, msg)` sends `msg()` once every `period`,
  starting one period after the call, while `actor.is_active()` is true; it
  stops when a send fails. The period must be positive.
- `send_after(period, actor, msg)` sends `msg()` once after `period`;
  awaiting the task raises `MessagingError` if the send failed.
- `exit_after(period, actor)` calls `actor.stop("Exit after <N>ms")` after
  `period`.
- `kill_after(period, actor)` calls `actor.kill()` after `period`.

A period is a number of seconds or a `datetime.timedelta` and may not be
negative. Each function returns an asyncio task that can be awaited, or
cancelled to call the operation off.

## Encoding payloads

`actorcall.serialization` turns primitive values into bytes and back. The
`Kind` enumeration names the fixed-width numeric types (8 to 128 bit signed
and unsigned integers, 32 and 64 bit floats) as well as booleans, characters,
strings and the empty unit value. Numbers are big-endian, a character is its
code point as four bytes, a string is UTF-8, and `Kind.size` gives the width
of one value (`None` for strings).

```python
from actorcall.serialization import Kind, encode, decode, encode_seq, decode_seq

encode(258, Kind.U16)                                  # b"\x01\x02"
decode(b"\x01\x02", Kind.U16)                          # 258
decode_seq(encode_seq([1, 2, 3], Kind.I32), Kind.I32)  # [1, 2, 3]
```

`decode` reads only the leading bytes it needs, and `decode_seq` ignores a
trailing partial element. Values that do not fit their kind, or bytes too
short for it, raise `ValueError`. Sequences of strings or of the unit value
have no encoding and raise `TypeError`.