import logging
import os
import random
import time

logger = logging.getLogger(__name__)


def get_random_int(n_max, rng=None):
    """Get random integer in [1, n_max] range"""
    rand = rng or random.SystemRandom()
    return rand.randint(1, n_max)


def get_n_jobs():
    """Get number of supported cores for multiprocessing if enabled"""
    check_env = os.environ.get("VCSNAKE_PARALLEL_CPU")
    if check_env:
        return int(check_env)
    else:
        return -1


def split_list(data, n):
    """Split data into n chunks"""
    return [data[i : i + n] for i in range(0, len(data), n)]


class Timer:
    def __init__(self, name):
        self.start_time = 0
        self.end_time = 0
        self.name = name

    def __enter__(self):
        self.start_time = time.time()
        return self

    @property
    def elapsed(self):
        return self.end_time - self.start_time

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.end_time = time.time()
        logger.debug("%s: %.2f seconds", self.name, self.elapsed)
