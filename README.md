# bb84link

Classical post-processing for a two-host BB84 key exchange. Bob reads raw
detector bits from a serial device and picks a random measurement basis for
each one. Alice compares the bases with her own. The two sides then sift the
key, exchange block parities to correct single-bit errors, and Bob reports the
quantum bit error rate (QBER).

## Install

    pip install .

To run the tests:

    pip install .[test]
    pytest

## Running the exchange

Start Alice first. She listens for one connection on TCP port 9000 (all
interfaces by default). Her data is test data: 512 bits, all `0`, each with a
random basis.

    bb84-alice

Options: `--host`, `--port`, `--key-length`.

Then start Bob. He opens `/dev/ttyACM0` at 115200 baud, connects to Alice at
`192.168.2.1:9000`, and reads detector bits from the serial device, keeping
only `0` and `1` characters:

    bb84-bob

Options: `--serial-port`, `--host`, `--port`, `--key-length`. If the serial
device or the connection fails, or the detector stream ends early, Bob prints
the error to standard error and exits with status 1.

Alice prints her sifted key. Bob prints the sifted key, the corrected key and a
summary such as:

    QBER: 1.95% (5 errors out of 256 sifted bits)

## The protocol in brief

1. Bob sends one basis character per bit (`+` rectilinear, `x` diagonal).
2. Alice replies with a match mask of `1`/`0` characters, one per position.
3. Alice sends her bits at the matching positions; Bob keeps them as the
   expected bits.
4. Alice sends one parity character for every block of four positions,
   counting only matching positions (a block with none gives `0`). Bob reads
   one parity for each block that holds at least one matching position, and
   flips a bit only when a block holds exactly one sifted bit and its parity
   disagrees.
5. Bob counts where his corrected bits differ from the expected bits at the
   matching positions and reports the QBER.

## Library use

The pieces are available from `bb84link.protocol`:

```python
from bb84link.protocol import match_mask, sift, block_parities, measure_qber

mask = match_mask("+x+x", "++xx")         # "1001"
key = sift("1010", mask)                   # "10"
parities = block_parities("1010", mask, 4)
report = measure_qber("1010", "1000", mask)
print(report.format())
```

`correct_errors(bits, mask, read_parity, block_size)` takes a callable that
returns the next remote parity character. `measure_qber` returns a
`QberReport` with `errors`, `sifted`, `percent` and `format()`. Functions that
compare strings raise `ValueError` when their lengths differ.

`bb84link.alice.AliceSession(bits, bases).handle(conn)` runs Alice's side over
a connected socket and returns her sifted key. `bb84link.bob.exchange(sock,
bits, bases)` runs Bob's side over a connected socket and returns a
`BobResult` (`mask`, `sifted_key`, `corrected_key`, `report`).
`bb84link.bob.read_detector_bits(stream, count)` reads bits from any object
with a `read(1)` method. None of these need the serial hardware.

## What this package does not do

It does not drive the optical hardware: it neither emits nor detects photons
and holds no code for the devices on either end. Bob expects a serial device
that already writes `0`/`1` characters, and Alice sends fixed all-zero test
bits rather than bits taken from a transmitter. There is no privacy
amplification, no authentication of the classical channel, and the error
correction fixes only blocks holding a single sifted bit.