"""Micro-benchmarks for DUID generation. Run with ``python -m shortduid.benchmark``."""

import timeit

from shortduid.services.generator import ShortDUID
from shortduid.services.logger import setup_logger

logger = setup_logger()

EPOCH = 1433116800000
LONG_SALT = "b130389689f522fa8b6664eb291083551ff0c00a4cf5a4905fdee8cd9063e55a"


def build_cases():
    duid = ShortDUID(0, LONG_SALT, EPOCH)
    duid_small_salt = ShortDUID(0, "a", EPOCH)

    return {
        "single DUIDInt generation": lambda: duid.get_duid_int(1),
        "batch of 10 DUIDInt generation": lambda: duid.get_duid_int(10),
        "single DUID generation": lambda: duid.get_duid(1),
        "batch of 10 DUID generation": lambda: duid.get_duid(10),
        "single DUID generation (1 character salt)": lambda: duid_small_salt.get_duid(1),
        "batch of 10 DUID generation (1 character salt)": lambda: duid_small_salt.get_duid(10),
    }


def run(number: int = 10000, repeat: int = 5) -> dict[str, float]:
    """Times every case and returns its best rate in calls per second."""
    results = {}
    for name, case in build_cases().items():
        best = min(timeit.repeat(case, number=number, repeat=repeat))
        results[name] = number / best
        logger.info("%s x %.0f ops/sec (%s runs sampled)", name, results[name], repeat)
    return results


if __name__ == "__main__":
    run()
