"""
Dependency initialization for the scanner package.

Pillow is required for reading image headers. tqdm is optional and only
drives the CLI progress bars.
"""

from __future__ import annotations

import warnings
import logging
from typing import Optional, Any

# Module-level logger
_logger = logging.getLogger(__name__)

# Check for required dependencies
try:
    import PIL
    from PIL import Image
except ImportError:
    raise ImportError(
        "Required package not found!\n"
        "Install with: pip install Pillow"
    )

# Image.open checks the declared size against this limit even though only the
# header is parsed. 500MP keeps large scans and panoramas fingerprintable.
Image.MAX_IMAGE_PIXELS = 500_000_000

warnings.filterwarnings("ignore", category=Image.DecompressionBombWarning)

# Optional: tqdm for progress bars
HAS_TQDM = False
_tqdm_class: Optional[Any] = None

try:
    from tqdm import tqdm as _tqdm_import
    HAS_TQDM = True
    _tqdm_class = _tqdm_import
except ImportError:
    _logger.debug("tqdm not installed - progress bars disabled")


def dependency_report() -> dict[str, str]:
    """Versions of the imaging and progress libraries, for `config` output."""
    report = {'Pillow': getattr(PIL, '__version__', 'unknown')}
    if HAS_TQDM:
        import tqdm
        report['tqdm'] = getattr(tqdm, '__version__', 'unknown')
    else:
        report['tqdm'] = 'not installed (pip install dupefolder[progress])'
    return report


__all__ = [
    'Image',
    'HAS_TQDM',
    '_tqdm_class',
    '_logger',
    'dependency_report',
]
