"""
signbench - Wallet signing latency benchmarks.

Run warmup and measured signing iterations against interchangeable wallet
providers, verify every signature, and rank providers by latency.
"""

from signbench.config import BenchmarkConfig, load_config
from signbench.errors import ServiceInitializationError, SignbenchError
from signbench.models import Chain, ChainSelection
from signbench.orchestrator import run_benchmarks, run_service_benchmark
from signbench.ranking import rank_all_chains, rank_services_by_chain
from signbench.services import ServiceRegistry, SignatureVerifier, WalletService
from signbench.statistics import calculate_all_stats, calculate_service_stats

__version__ = "0.1.0"
__all__ = [
    "BenchmarkConfig",
    "Chain",
    "ChainSelection",
    "ServiceInitializationError",
    "ServiceRegistry",
    "SignatureVerifier",
    "SignbenchError",
    "WalletService",
    "__version__",
    "calculate_all_stats",
    "calculate_service_stats",
    "load_config",
    "rank_all_chains",
    "rank_services_by_chain",
    "run_benchmarks",
    "run_service_benchmark",
]
