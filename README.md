# tinyproto

Small building blocks for framed serial protocols of the HDLC family. The
package has no dependencies outside the standard library.

## Modules

### `tinyproto.crc`

Frame check sequences:

- `crc16(data, crc=INIT_FCS16)` and `crc16_byte(crc, byte)` compute FCS-16.
  This is the CCITT variant used by PPP in HDLC-like framing.
- `crc32(data, crc=INIT_FCS32)` and `crc32_byte(crc, byte)` compute FCS-32.
- `checksum(data, total=INIT_CHECKSUM)` returns `0xFFFF` minus the 16-bit sum
  of the bytes. `checksum_byte(total, byte)` adds one byte to a running sum.
- `CrcType` lists the CRC options: `DEFAULT`, `CRC_8`, `CRC_16`, `CRC_32` and
  `OFF`. `crc_field_size(crc_type)` gives the size of the field in bytes.
- The constants `INIT_FCS16`, `GOOD_FCS16`, `INIT_FCS32`, `GOOD_FCS32`,
  `INIT_CHECKSUM` and `GOOD_CHECKSUM` hold the start values and the good
  residue values.

The `*_byte` functions return the running value without the final
complement. `crc16`, `crc32` and `checksum` return the finished value.

### `tinyproto.errors`

- `ErrorCode` is an `IntEnum` of result codes, from `SUCCESS` (0) down to
  `UNKNOWN_PEER` (-9). Each member has a `description` property.
- `Flag` is an `IntFlag` of API flags: `NO_WAIT`, `READ_ALL`, `LOCK_SEND` and
  `WAIT_FOREVER`.
- `raise_for_code(code)` returns a non-negative code unchanged. For a negative
  code it raises `TinyProtocolError`, whose `code` attribute holds the
  `ErrorCode`. If the value is not a known code, `code` holds the plain int.
- `set_log_level(level)` sets the library-wide log level, from 0 to 255, and
  `get_log_level()` reads it. The default is 0, which means logs are off.

### `tinyproto.listing`

`ElementList` is a doubly linked list of `ListElement` objects. The newest
element comes first. Subclass `ListElement` to carry data.

- `add(element)` inserts the element at the head and returns a 12-bit
  identifier. The identifier comes from one counter shared by all lists.
- `remove(element)` unlinks the element. `clear()` forgets all elements.
- `enumerate(func, data)` calls `func(element, data)` on each element in
  turn. It stops as soon as the callback returns a false value.
- Iterating over the list and calling `len()` both work.

All lists share one lock.

### `tinyproto.hal`

- `Mutex` is a non-reentrant mutex with `lock()`, `try_lock()` and
  `unlock()`, and it works as a context manager. A blocking `lock()` polls
  `try_lock()` and sleeps for one millisecond between tries. Unlocking a free
  mutex does nothing.
- `Events` is a group of eight event bits with the methods
  `set(bits)`, `clear(bits)`, `check(bits, clear=False)` and
  `wait(bits, clear=False, timeout=0)`. `wait` polls until any of the
  requested bits is set. It returns all bits that were set at that moment,
  or 0 once `timeout` milliseconds have passed. When `clear` is true, the
  requested bits are cleared after a match. The constants `EVENT_BITS_ALL`,
  `EVENT_BITS_CLEAR` and `EVENT_BITS_LEAVE` are provided.
- `sleep(ms)`, `sleep_us(us)`, `millis()` and `micros()` are the timing
  functions. The timestamps are 32-bit and wrap around. `install_hal()` can
  replace any of the four with keyword arguments; functions passed as `None`
  stay as they are. `reset_hal()` restores the built-in ones.

## Examples

Computing frame check sequences:

```python
from tinyproto.crc import CrcType, crc16, crc32, checksum, crc_field_size

payload = b"123456789"
crc16(payload)                   # 0x906E
crc32(payload)                   # 0xCBF43926
checksum(payload)                # 0xFE22

crc_field_size(CrcType.CRC_16)   # 2
crc_field_size(CrcType.OFF)      # 0
```

Turning status codes into exceptions:

```python
from tinyproto.errors import ErrorCode, TinyProtocolError, raise_for_code

try:
    raise_for_code(ErrorCode.TIMEOUT)
except TinyProtocolError as exc:
    assert exc.code is ErrorCode.TIMEOUT
```

Waiting for event bits:

```python
from tinyproto.hal import Events

events = Events()
events.set(0x01)
events.wait(0x01, True, 100)   # returns 0x01 and clears it
events.check(0x01)             # 0
```

Using a custom clock, for example in tests or on a simulated target:

```python
from tinyproto import hal

ticks = iter(range(1_000_000))
hal.install_hal(millis=lambda: next(ticks), sleep=lambda ms: None)
# ...
hal.reset_hal()
```

## What this package does not do

The package provides only the pieces listed above. It has no HDLC framer and
no light or full-duplex protocol engine. It also has no packet class, no
serial-port access and no command-line tool. Frames and transports are left
to the code that uses these building blocks.

## Installation

```
pip install .
```

## Running the tests

```
pip install .[test]
pytest
```