# Default character set of the interactive renderer
DIGITS = "0123456789"

# Space (32) through tilde (126)
ASCII_PRINTABLE = "".join(chr(i) for i in range(32, 127))

# Rough density ramp for quick previews
RAMP = " .:-=+*#%@"

PRESETS = {
    "digits": DIGITS,
    "ascii": ASCII_PRINTABLE,
    "ramp": RAMP,
}
