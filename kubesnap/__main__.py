"""Entry point for `python -m kubesnap`.

Usage:
    python -m kubesnap
    KUBESNAP_NAMESPACE=default python -m kubesnap
"""

from __future__ import annotations

import asyncio

from kubesnap.app import main

asyncio.run(main())
