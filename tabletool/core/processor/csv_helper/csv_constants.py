# csv_helper/csv_constants.py
"""
CSV Handler Constants

Candidate sets, sampling limits and display names used by the reader,
writer and format heuristic.
"""

# === Encoding constants ===

# Legacy single-byte fallbacks tried after UTF-8 (priority order)
LEGACY_ENCODING_CANDIDATES = [
    "cp1252",     # Western (Windows Latin 1)
    "mac-roman",  # Western (Mac OS Roman)
]

# Maximum number of legacy candidates kept per detection
MAX_LEGACY_ENCODINGS = 2

# Minimum chardet confidence for its guess to become a candidate
CHARDET_MIN_CONFIDENCE = 0.7

# Bytes handed to chardet
CHARDET_SAMPLE_SIZE = 10000

# Encodings offered to a host's encoding picker (display name, codec)
SUPPORTED_ENCODINGS = [
    ("Unicode (UTF-8)", "utf-8"),
    ("Unicode (UTF-8 with BOM)", "utf-8-sig"),
    ("Unicode (UTF-16)", "utf-16"),
    ("Western (Mac OS Roman)", "mac-roman"),
    ("Western (Windows Latin 1)", "cp1252"),
    ("Chinese (GBK)", "gbk"),
    ("Central European (ISO Latin 2)", "iso8859-2"),
    ("Central European (Windows Latin 2)", "cp1250"),
    ("Cyrillic (Windows)", "cp1251"),
    ("Greek (Windows)", "cp1253"),
    ("Turkish (Windows)", "cp1254"),
    ("Hebrew (Windows)", "cp1255"),
    ("Arabic (Windows)", "cp1256"),
    ("Baltic (Windows)", "cp1257"),
    ("Vietnamese (Windows)", "cp1258"),
    ("Thai (Windows)", "cp874"),
]

# Single-byte encodings a chardet guess may contribute
SINGLE_BYTE_ENCODINGS = frozenset([
    "cp1252", "mac-roman", "iso8859-2", "cp1250", "cp1251", "cp1253",
    "cp1254", "cp1255", "cp1256", "cp1257", "cp1258", "cp874",
])


# === Delimiter constants ===

# Separator candidates, highest priority first
DELIMITER_CANDIDATES = [',', ';', '\t', '|', ':']

# Delimiter display names
DELIMITER_NAMES = {
    ',': 'Comma (,)',
    ';': 'Semicolon (;)',
    '\t': 'Tab (\\t)',
    '|': 'Pipe (|)',
    ':': 'Colon (:)',
}

# Separators kept after ranking
MAX_DELIMITER_CANDIDATES = 3

QUOTE_CANDIDATES = ['"', "'"]

ESCAPE_CANDIDATES = ['"', '\\']


# === Sampling limits ===

# Rows tokenized per heuristic candidate
SAMPLE_ROWS = 10

# Bytes of input tokenized per heuristic candidate
SAMPLE_BYTES = 64 * 1024

# Characters of decoded text inspected for separator counting
SAMPLE_CHARS = 1000

# Lines of decoded text inspected for separator counting
SAMPLE_LINES = 10


# === Table constants ===

# Canonical empty document
SENTINEL_ROWS = [[""]]

# Rows between parse progress notifications
PROGRESS_INTERVAL = 100

# Sample table serialized by preview_configuration()
PREVIEW_ROWS = [
    ["Name", "Age", "City", "Salary"],
    ["John Doe", "25", "New York", "50,000.00"],
    ["Jane Smith", "30", "San Francisco", "75,500.50"],
    ["Bob Johnson", "35", "Chicago", "62,250.75"],
]
