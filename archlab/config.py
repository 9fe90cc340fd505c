from __future__ import annotations

import os


class Config:
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///archlab.db")
    LOG_LEVEL = os.getenv("ARCHLAB_LOG_LEVEL", "INFO")

    # "warning" or "error"
    CYCLE_POLICY = os.getenv("ARCHLAB_CYCLE_POLICY", "warning")
    DEFAULT_TARGET_THROUGHPUT = float(os.getenv("ARCHLAB_DEFAULT_TARGET_THROUGHPUT", "1000"))

    # ops/sec per unit of resource
    CPU_OPS_PER_GHZ_CORE = 1000.0
    MEMORY_OPS_PER_GB = 1000.0
    NETWORK_OPS_PER_MBPS = 100.0
    EDGE_OPS_PER_MBPS = 100.0

    DEFAULT_LATENCY_MS = 50.0
