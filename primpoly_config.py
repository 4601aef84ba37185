"""
primpoly_config.py
Default configuration, integer width limits and a small logger helper.

The search itself uses exact Python integers; the configured word width only
decides how large p ** n may grow before inputs are rejected.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

DEFAULT_CONFIG: Dict[str, Any] = {
    "integer_bits": 64,            # 64 or 128, caps p ** n
    "num_prime_test_trials": 50,   # witnesses per almost-sure primality test
    "prime_test_seed": 314159,     # seed for the witness generator
    "log_level": "WARNING",
    "mp_dps": 30,                  # mpmath precision for reported ratios
}

SUPPORTED_INTEGER_BITS = (64, 128)

# Largest degree n accepted for each integer width.
MAX_DEG_POLY = {64: 62, 128: 125}


def load_config(path: str, base: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Load a JSON config file and merge it into base (shallow merge).

    :param path: path to JSON config file
    :param base: base configuration dictionary to update (if None use DEFAULT_CONFIG)
    :return: merged configuration dictionary
    """
    base = base.copy() if base is not None else DEFAULT_CONFIG.copy()
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with p.open("r", encoding="utf-8") as fh:
        data = json.load(fh)
    for k, v in data.items():
        base[k] = v
    integer_limits(base["integer_bits"])
    return base


def resolve_config(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return DEFAULT_CONFIG overlaid with the given (possibly partial) config."""
    cfg = DEFAULT_CONFIG.copy()
    if config:
        cfg.update(config)
    return cfg


def integer_limits(bits: int) -> Tuple[int, int, int]:
    """
    Limits tied to a b-bit signed integer word.

    Returns (max_p_to_n, max_deg_poly, max_num_prime_factors):
      max_p_to_n            = 2^(b-1) - 1
      max_deg_poly          = largest n for p = 2, 62 or 125
      max_num_prime_factors = b/2 - 1, a bound on the number of distinct
                              primes of any r
    """
    if bits not in SUPPORTED_INTEGER_BITS:
        raise ValueError(f"integer_bits must be one of {SUPPORTED_INTEGER_BITS}, got {bits}")
    max_p_to_n = 2 ** (bits - 1) - 1
    max_deg_poly = MAX_DEG_POLY[bits]
    max_num_prime_factors = bits // 2 - 1
    return max_p_to_n, max_deg_poly, max_num_prime_factors


def setup_basic_logger(name: str = "primpoly", level: int = logging.INFO) -> logging.Logger:
    """
    Return a logger configured with a StreamHandler and a compact formatter.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if logger.handlers:
        return logger
    ch = logging.StreamHandler()
    fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
    ch.setFormatter(fmt)
    logger.addHandler(ch)
    return logger
