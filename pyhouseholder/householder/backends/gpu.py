"""
GPU backend for the Householder reduction using PyTorch.

Same reflections as the CPU reference, in float64 on CUDA. Within one
step the trailing columns are independent of each other, so they are
reflected together as a single rank-1 update of the trailing block
instead of one column at a time. The outer loop over pivot columns
stays sequential.
"""

import math

import numpy as np

from pyhouseholder.core.result import Result
from pyhouseholder.core.exceptions import ZeroNormError
from pyhouseholder.core.compute.timing import Timer
from pyhouseholder.householder.design import HouseholderDesign
from pyhouseholder.householder.solution import HouseholderParams
from pyhouseholder.householder._common import finish, info_dict, reflection_sign


class GPUHouseholderBackend:
    """
    GPU backend using PyTorch.

    float64 only; MPS (Apple Silicon) has no float64 support and is
    refused. Results are copied back into the design's buffers, so the
    in-place contract is the same as on the CPU.
    """

    def __init__(self, device: str = 'cuda', zero_subdiagonal: bool = False):
        """
        Args:
            device: CUDA device string ('cuda', 'cuda:0', ...)
            zero_subdiagonal: See CPUHouseholderBackend
        """
        import torch

        if device == 'mps':
            raise RuntimeError(
                "MPS does not support float64. Use backend='cpu' on Apple Silicon."
            )
        if not device.startswith('cuda'):
            raise ValueError(
                f"Unknown GPU device: {device!r}. Use 'cuda' or 'cuda:<index>'."
            )
        if not torch.cuda.is_available():
            raise RuntimeError(
                "CUDA not available. Install PyTorch with CUDA support, "
                "or use backend='cpu'."
            )

        self.device = torch.device(device)
        self.dtype = torch.float64
        self.device_name = torch.cuda.get_device_properties(self.device).name
        self.zero_subdiagonal = zero_subdiagonal

    @property
    def name(self) -> str:
        return 'gpu_householder'

    def solve(self, design: HouseholderDesign) -> Result[HouseholderParams]:
        """
        Run the reduction on the GPU and write R and the reflectors back.

        Raises:
            ZeroNormError: If a pivot sub-column is entirely zero. The
                design's buffers then hold the state at the failing step.
            NumericalError: If a column of R overflows float64
        """
        import torch

        timer = Timer(sync_cuda=True)
        timer.start()
        m, n = design.m, design.n

        with timer.section('data_transfer'):
            A = torch.from_numpy(np.ascontiguousarray(design.matrix)).to(
                device=self.device, dtype=self.dtype
            )
            V = torch.zeros(
                design.reflectors.buffer.shape[0], device=self.device, dtype=self.dtype
            )

        # Reflector slots written so far; later slots are left as the caller had them
        written = 0
        try:
            for i in range(n):
                start = design.reflectors.offset(i)
                v = V[start:start + m - i]

                with timer.section('reflector'):
                    v.copy_(A[i:, i])
                    written = i + 1
                    scale = v.abs().max().item()
                    if scale == 0.0:
                        raise ZeroNormError(
                            f"Reflection vector {i} has zero norm: column {i} is zero "
                            f"from row {i} down, so the matrix is rank-deficient.",
                            column=i,
                            m=m,
                            n=n,
                        )
                    v.div_(scale)
                    tail_norm_sq = torch.dot(v[1:], v[1:]).item()
                    head = v[0].item()
                    head += reflection_sign(head) * math.sqrt(head * head + tail_norm_sq)
                    norm = math.sqrt(head * head + tail_norm_sq)
                    v[0] = head
                    v.div_(norm)

                with timer.section('update'):
                    trailing = A[i:, i:]
                    coef = 2.0 * (v @ trailing)
                    trailing.sub_(torch.outer(v, coef))
        finally:
            with timer.section('data_transfer'):
                design.matrix[...] = A.cpu().numpy()
                end = design.reflectors.offset(written)
                design.reflectors.buffer[:end] = V[:end].cpu().numpy()

        with timer.section('finish'):
            diagonal, rank = finish(design, self.zero_subdiagonal)

        timer.stop()

        params = HouseholderParams(
            R=design.matrix,
            reflectors=design.reflectors,
            rank=rank,
            diagonal=diagonal,
        )

        info = info_dict(design, rank, self.zero_subdiagonal)
        info['device'] = self.device_name

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=(),
        )
