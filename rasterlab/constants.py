"""
Raster Lab - Master Constants Reference

Fixed values used by the transformation and analysis algorithms.
Changing any of these changes pixel-exact output of the transforms.
"""

# =============================================================================
# COLOR PACKING CONSTANTS
# =============================================================================

# Bit offsets of each channel inside a packed color
ALPHA_SHIFT = 24
RED_SHIFT = 16
GREEN_SHIFT = 8
BLUE_SHIFT = 0

# Mask for a single 8-bit channel
CHANNEL_MASK = 0xFF

# Mask for the 24 RGB bits of a packed color
RGB_MASK = 0xFFFFFF

# Alpha bits reported for images without an alpha band
OPAQUE_ALPHA = 0xFF000000

# Largest channel value
MAX_CHANNEL_VALUE = 255

# =============================================================================
# NAMED COLORS
# =============================================================================

BLACK = 0xFF000000

WHITE = 0xFFFFFFFF

# Background of rotated canvases (white, alpha = 255)
ROTATION_BACKGROUND = WHITE

# =============================================================================
# LUMINANCE CONSTANTS (NTSC)
# =============================================================================

LUMINANCE_RED_WEIGHT = 0.299
LUMINANCE_GREEN_WEIGHT = 0.587
LUMINANCE_BLUE_WEIGHT = 0.114

# Two colors are compatible if their luminances differ by at least this much
COMPATIBLE_LUMINANCE_DELTA = 128.0

# =============================================================================
# POSTERIZE CONSTANTS
# =============================================================================

# Upper bound (inclusive) of the low band; 64 maps to the low level
POSTERIZE_LOW_MAX = 64

# Upper bound (inclusive) of the middle band
POSTERIZE_MID_MAX = 128

POSTERIZE_LOW_LEVEL = 32
POSTERIZE_MID_LEVEL = 96
POSTERIZE_HIGH_LEVEL = 222

# =============================================================================
# NEIGHBORHOOD FILTER CONSTANTS
# =============================================================================

# 3x3 window: one pixel on each side
NEIGHBORHOOD_RADIUS = 1

# Default block edge for box paint
DEFAULT_BOX_SIZE = 4

# Smallest allowed block edge
MIN_BOX_SIZE = 1

# =============================================================================
# SPECTRAL CONSTANTS
# =============================================================================

# Direct O(W^2 H^2) summation
DFT_METHOD_DIRECT = "direct"

# Same sums evaluated through numpy.fft
DFT_METHOD_FFT = "fft"

DFT_METHODS = (DFT_METHOD_DIRECT, DFT_METHOD_FFT)

# Default tolerance when comparing spectra
DFT_COMPARE_TOLERANCE = 1e-6

# =============================================================================
# SIMILARITY CONSTANTS
# =============================================================================

# Both vectors all zero
SIMILARITY_BOTH_ZERO = 1.0

# Exactly one vector all zero
SIMILARITY_ONE_ZERO = 0.0

# Minimum similarity of a full-turn rotation against its source
FULL_ROTATION_MIN_SIMILARITY = 0.98

# =============================================================================
# FILE FORMAT CONSTANTS
# =============================================================================

READABLE_SUFFIXES = (".png", ".jpg", ".jpeg", ".gif", ".bmp")

WRITABLE_SUFFIXES = (".png", ".jpg", ".jpeg")

# Suffixes that cannot carry an alpha band
OPAQUE_SUFFIXES = (".jpg", ".jpeg")

# =============================================================================
# PIPELINE OPERATIONS
# =============================================================================

class Operation:
    GRAYSCALE = "grayscale"
    RED = "red"
    MIRROR = "mirror"
    NEGATIVE = "negative"
    POSTERIZE = "posterize"
    CLIP = "clip"
    DENOISE = "denoise"
    WEATHER = "weather"
    BOX_PAINT = "box_paint"
    ROTATE = "rotate"
    GREEN_SCREEN = "green_screen"
    DFT = "dft"

    ALL = (
        GRAYSCALE, RED, MIRROR, NEGATIVE, POSTERIZE, CLIP,
        DENOISE, WEATHER, BOX_PAINT, ROTATE, GREEN_SCREEN, DFT,
    )

# =============================================================================
# ORIGIN CONVENTIONS
# =============================================================================

class Origin:
    UPPER_LEFT = "UPPER_LEFT"
    LOWER_LEFT = "LOWER_LEFT"
