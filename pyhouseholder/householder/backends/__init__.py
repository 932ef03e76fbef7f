"""
Householder reduction backends.

    cpu: Column-by-column reference loop over the vector primitives
    gpu: PyTorch float64 on CUDA (imported lazily)
"""

from pyhouseholder.householder.backends.cpu import CPUHouseholderBackend, householder_reduce

__all__ = [
    "CPUHouseholderBackend",
    "householder_reduce",
]
