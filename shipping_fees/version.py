"""Engine version, shown by scripts and stamped on option tables."""

VERSION = "2026.10.0"
