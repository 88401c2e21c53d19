"""md2slides – top-level package

Exposes the markdown → Google Slides translator **and** sets up a minimal
logging configuration so that every sub-module can call

```python
import logging
logger = logging.getLogger(__name__)
```

and honour a single environment variable `MD2SLIDES_LOG_LEVEL`.
"""

from __future__ import annotations

import logging
import os

LOG_LEVEL = os.getenv("MD2SLIDES_LOG_LEVEL", "INFO").upper()
if not logging.getLogger().handlers:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

# Public API re-exports ------------------------------------------------
from .ids import IdentifierGenerator  # noqa: E402  (import after logger)
from .models import SlideSpec  # noqa: E402
from .request_builder import SlideRequestBuilder, assemble, batch_requests, build  # noqa: E402
from .segmenter import segment  # noqa: E402

__all__ = [
    "IdentifierGenerator",
    "SlideSpec",
    "SlideRequestBuilder",
    "assemble",
    "batch_requests",
    "build",
    "segment",
]
