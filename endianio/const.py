"""
Constants for the endianio codec and streams.
"""

# Number of octets (8-bit bytes) in each primitive type
NUM_OCTETS_IN_BYTE = 1
NUM_OCTETS_IN_SHORT = 2
NUM_OCTETS_IN_CHAR = 2
NUM_OCTETS_IN_INT = 4
NUM_OCTETS_IN_LONG = 8
NUM_OCTETS_IN_FLOAT = 4
NUM_OCTETS_IN_DOUBLE = 8

# Scratch buffer must hold the widest primitive
SCRATCH_SIZE = NUM_OCTETS_IN_LONG

# Modified UTF-8 strings carry an unsigned 16-bit byte length prefix
MAX_UTF_LENGTH = 0xFFFF

# Read size used when skipping over a non-seekable stream
SKIP_CHUNK_SIZE = 0x2000
