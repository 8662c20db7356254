"""
canaryctl - Ad-hoc canary analysis client.

Assemble a canary request, submit it, wait for the verdict.
"""

from canaryctl.builder import RequestAssembler, load_adhoc_config
from canaryctl.monitor import ExecutionMonitor
from canaryctl.providers import MetricProviderRegistry
from canaryctl.results import partition

__version__ = "0.1.0"
__all__ = [
    "ExecutionMonitor",
    "MetricProviderRegistry",
    "RequestAssembler",
    "__version__",
    "load_adhoc_config",
    "partition",
]
