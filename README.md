# locutils

Building blocks for a location service, in plain Python with no
third-party dependencies.

## What is in it

- `locutils.nmea`: `put_checksum(body)` appends `*XX\r\n` to a sentence,
  `XX` being the XOR of every character after the leading `$`.
  `NmeaGenerator` checksums sentences and hands them to
  `callback(timestamp_ms, sentence, length)`; it also caches the satellites
  used in the last fix and the dilutions of precision from the last
  satellite report. `send_blank_fix()` sends the empty GSA, VTG, RMC and
  GGA sentences. `PositionMode` and `LocationExtended` describe the fix.
- `locutils.nmea_pos`: `generate_pos(generator, location, extended,
  generate_nmea)` sends `$GPGSA`, `$GPVTG`, `$GPRMC` and `$GPGGA` for a
  `Location`, or blank sentences when `generate_nmea` is false.
  `format_lat_lon(latitude, longitude)` gives the `DDMM.MMMMMM,H,DDDMM.MMMMMM,H,`
  field. A sentence that would reach 200 characters raises `ValueError`.
- `locutils.nmea_sv`: `generate_sv(generator, sv_status, extended)` sends
  `$GPGSV` and `$GLGSV` sentences (four satellites each) for an `SvStatus`
  holding `SvInfo` entries, then either blank position sentences (no
  satellite used) or caches the used-in-fix mask and dilutions for the next
  `generate_pos`. `gsv_sentences(talker, svs, prn_start, prn_end)` builds
  the bodies alone.
- `locutils.linked_list`: `LinkedList`, a FIFO with `add`, `remove`,
  `is_empty`, `flush` and `search`; items may carry a `dealloc` callable that
  is called when the list discards them. Failures raise `LinkedListError`
  with a `code`.
- `locutils.target`: `TargetDetector` works out a device's target code from
  system properties (through a `get_property(name, default)` callable you
  supply) and sysfs files under a `root` directory, and remembers it.
  `get_target_name`, `target_set` and `get_target_gnss_type` handle target
  codes; `GnssTarget` and `SscType` are their parts.
- `locutils.log_util`: `LocLogger` and the shared `loc_logger`, filtered by
  a numeric debug level set with `logger_init(debug, timestamp)`; name
  lookups `get_name_from_val` and `get_name_from_mask`; `get_time()` and
  `get_timestamp()`.
- `locutils.clock`: `system_time_us`, `elapsed_millis_since_boot` and
  `ts_format`.

## Installation

```
pip install .
```

## Example

```python
from locutils.nmea import LocationExtended, NmeaGenerator
from locutils.nmea_pos import Location, generate_pos
from locutils.nmea_sv import SvInfo, SvStatus, generate_sv

generator = NmeaGenerator(callback=lambda ts, sentence, length: print(sentence, end=""))

svs = SvStatus(
    sv_list=[SvInfo(prn=5, snr=38.0, elevation=45.0, azimuth=120.0),
             SvInfo(prn=70, snr=30.0, elevation=20.0, azimuth=300.0)],
    used_in_fix_mask=1 << 4,
)
generate_sv(generator, svs, LocationExtended(pdop=1.8, hdop=1.0, vdop=1.5))

fix = Location(timestamp=1_700_000_000_000, latitude=52.5, longitude=13.4,
               speed=1.2, bearing=90.0)
generate_pos(generator, fix)
```

```python
from locutils.linked_list import LinkedList
from locutils.target import TARGET_MDM, get_target_name

items = LinkedList()
items.add("first")
items.add("second")
print(items.remove())             # "first"
print(get_target_name(TARGET_MDM))  # " GNSS_MDM with SSC"
```

## What it does not do

There is no command-line program. The package holds no blocking message
queue, no one-shot timers and no configuration-file reader; a service built
on it has to bring its own.

## Tests

```
pip install .[test]
pytest
```