"""
Smoothing functions over numeric count sequences.

Every function returns a new list the same length as its input and keeps no
state between calls. Windows shrink at the start of the series instead of
requiring a full window.
"""
from enum import Enum
from typing import List, Sequence


class SmoothingMethod(str, Enum):
    SMA = "sma"
    WMA = "wma"
    EMA = "ema"


def _check_window(window: int) -> None:
    if window < 1:
        raise ValueError(f"window must be >= 1, got {window}")


def moving_average(data: Sequence[float], window: int) -> List[float]:
    _check_window(window)
    result = []
    for i in range(len(data)):
        chunk = data[max(0, i - window + 1):i + 1]
        result.append(sum(chunk) / len(chunk))
    return result


def weighted_moving_average(data: Sequence[float], window: int) -> List[float]:
    """
    Weights [window, window-1, ..., 1] go to the most recent element first.
    Each point is normalized by the weights actually used.
    """
    _check_window(window)
    result = []
    for i in range(len(data)):
        chunk = data[max(0, i - window + 1):i + 1]
        weights = range(window, window - len(chunk), -1)
        weighted_sum = sum(w * v for w, v in zip(weights, reversed(chunk)))
        result.append(weighted_sum / sum(weights))
    return result


def exponential_smoothing(data: Sequence[float], alpha: float) -> List[float]:
    if not 0 < alpha < 1:
        raise ValueError(f"alpha must be in (0, 1), got {alpha}")
    result: List[float] = []
    for value in data:
        if not result:
            result.append(float(value))
        else:
            result.append(alpha * value + (1 - alpha) * result[-1])
    return result


def smooth(data: Sequence[float], method: SmoothingMethod, window: int = 3, alpha: float = 0.5) -> List[float]:
    if method == SmoothingMethod.SMA:
        return moving_average(data, window)
    if method == SmoothingMethod.WMA:
        return weighted_moving_average(data, window)
    return exponential_smoothing(data, alpha)
