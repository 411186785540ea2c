"""Data loader module for parsing demand profile CSV files."""

import logging
import os
import pandas as pd
from typing import Dict, Tuple

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["kind", "index", "multiplier"]


def load_demand_profile(csv_path: str) -> Tuple[Dict[int, float], Dict[int, float]]:
    """
    Parse a demand profile CSV into hourly and day-of-week multipliers.

    Expected columns: ``kind`` (``hour`` or ``day``), ``index`` (0-23 for
    hours, 0-6 for days with 0=Monday) and ``multiplier``. Rows of other
    kinds are skipped with a warning.

    Args:
        csv_path: Path to the CSV file

    Returns:
        Tuple of (hourly_multipliers, day_multipliers)

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If a required column is missing or a value is out of range
    """
    if not os.path.exists(csv_path):
        raise FileNotFoundError(csv_path)

    df = pd.read_csv(csv_path)
    logger.info(f"Loaded demand profile CSV with {len(df)} rows")

    for col in REQUIRED_COLUMNS:
        if col not in df.columns:
            raise ValueError(f"Missing required column: {col}")

    hourly: Dict[int, float] = {}
    daily: Dict[int, float] = {}

    for _, row in df.iterrows():
        kind = str(row["kind"]).strip().lower()
        index = int(row["index"])
        multiplier = float(row["multiplier"])

        if multiplier < 0:
            raise ValueError(f"Negative multiplier for {kind} {index}: {multiplier}")

        if kind == "hour":
            if not 0 <= index <= 23:
                raise ValueError(f"Hour index out of range: {index}")
            hourly[index] = multiplier
        elif kind == "day":
            if not 0 <= index <= 6:
                raise ValueError(f"Day index out of range: {index}")
            daily[index] = multiplier
        else:
            logger.warning(f"Skipping demand profile row with unknown kind '{kind}'")

    logger.info(f"Demand profile: {len(hourly)} hourly and {len(daily)} daily multipliers")
    return hourly, daily
