# Spectral analysis module

from .dft import (
    NestedMatrix,
    DFTOutput,
    SpectralAnalyzer,
    intensity_matrix,
    dft_direct,
    dft_fft,
    amplitude_and_phase,
)

__all__ = [
    "NestedMatrix",
    "DFTOutput",
    "SpectralAnalyzer",
    "intensity_matrix",
    "dft_direct",
    "dft_fft",
    "amplitude_and_phase",
]
