import logging
import os
import random

import pytest

# keep joblib in-process, pools are slower than the tiny batches used here
os.environ.setdefault("VCSNAKE_PARALLEL_CPU", "1")

logger = logging.getLogger(__name__)


@pytest.fixture
def rng():
    seed = random.SystemRandom().getrandbits(64)
    logger.info("test rng seed: %d", seed)
    return random.Random(seed)
