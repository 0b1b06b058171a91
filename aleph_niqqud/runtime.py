"""Runtime environment detection."""
from __future__ import annotations

from typing import Optional

import torch

CUDA_AVAILABLE = torch.cuda.is_available()


def configure_torch_threads(num_threads: Optional[int], logger) -> None:
    if num_threads is None:
        return
    torch.set_num_threads(num_threads)
    logger.info("Torch intra-op threads set to %s", num_threads)
