# sensorlink

This package reads an MPU6000 accelerometer and a TCS3472 colour sensor on a
Linux I2C bus. It sends the readings in batches over UDP to a server. The
server prints each batch with its summary statistics.

It has no dependencies outside the standard library. The I2C access uses
`fcntl` and the `I2C_SLAVE` ioctl, so the sensor side runs on Linux only. The
protocol, statistics and server modules do not need any hardware.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Commands

### `sensorlink-server`

```
sensorlink-server [--host HOST] [--port PORT]
```

The server binds a UDP socket. By default it binds `0.0.0.0` on port 12345. It
prints `Servidor esperando datos...` and then handles datagrams until it is
interrupted. It reads up to 4095 bytes of each datagram and replies to the
sender with `acknowledgement`.

If the datagram holds a `[ ... ]` list of samples, the server prints two
sections:

- `VALORES RECIBIDOS:` lists every sample with its acceleration and its red,
  green and blue values.
- `MEASURES:` gives the mean, maximum, minimum and population standard
  deviation of each acceleration axis and each colour channel.

The labels in this report are in Spanish. If the datagram has no such list,
the server prints `Datos recibidos (sin formato esperado):` followed by the
text it received.

### `sensorlink-client`

```
sensorlink-client [--server ADDRESS] [--port PORT] [--device PATH]
```

The client opens and initialises both sensors on the I2C bus. The bus is
`/dev/i2c-1` unless `--device` names another one. The default server is
`192.168.0.21` on port 12345; use `--server` to give your own IPv4 address.

The client takes one sample per second. After every ten samples it sends the
batch, waits for the server's reply and prints it as
`Respuesta del servidor: ...`.

If a sensor read fails, the client reports the error on stderr and the fields
from that sensor are sent as zero. If a sensor cannot be opened or initialised,
or if the server address is not a valid IPv4 address, the client exits with
status 1.

## Library use

### Sensors

```python
from sensorlink.accelerometer import open_mpu6000
from sensorlink.colorimeter import open_tcs3472

with open_mpu6000("/dev/i2c-1") as accel, open_tcs3472("/dev/i2c-1") as color:
    accel.initialize()
    color.initialize()
    print(accel.read_acceleration())   # Acceleration(x, y, z) in g, ±2 g range
    print(color.read_colors())         # ColorReading(clear=0, red, green, blue)
```

`Mpu6000` and `Tcs3472` accept any object that has `write`, `read` and `close`
methods. `sensorlink.i2c.I2CDevice` is the one they use on real hardware.

The clear channel of the colour sensor is not read and is always 0.

`decode_acceleration` turns the raw register bytes into an `Acceleration`, and
`decode_colors` turns them into a `ColorReading`. Both functions raise
`ValueError` if they are given the wrong number of bytes.

### Wire format and statistics

```python
from sensorlink.protocol import SensorSample, encode_samples, parse_samples
from sensorlink.stats import summarize_samples

text = encode_samples([SensorSample(0.0, 0.0, 1.0, 0, 10, 20, 30)])
samples = parse_samples(text)
print(summarize_samples(samples))
```

`encode_samples` writes a batch as `{ "samples": [{"ax":...,...}, ...] }`, with
acceleration given to four decimals. `parse_samples` reads up to 100 samples
from the first bracketed list. Fields it cannot read are left at zero, and it
does not keep the clear value.

`summarize` and `summarize_samples` raise `ValueError` when they are given no
values. `sensorlink.server.handle_datagram` returns the text the server would
print for a datagram, and `format_report` returns the report for a list of
samples.

### Errors

- Errors on the I2C bus raise `sensorlink.i2c.I2CError`, which is a subclass of
  `OSError`.
- Text that has no bracketed sample list raises
  `sensorlink.protocol.FormatError`, which is a subclass of `ValueError`.

## Limitations

- The server only prints what it receives. It does not store batches or keep
  any history between datagrams.
- The client waits for a reply after each batch and does not retry the send.