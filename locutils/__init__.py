"""Location service utilities: NMEA sentence generation, a FIFO list, GNSS target detection and logging."""

__version__ = "0.1.0"