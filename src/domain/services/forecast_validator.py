"""Domain service helpers for validating forecast parameters."""

from typing import List, Optional

from src.domain.entities.errors import InvalidParameterError


def validate_forecast_parameters(
    *,
    window_size: int,
    series_length: int,
    train_fraction: float,
    horizon: int,
    confidence_level: float,
    rank: Optional[int] = None,
) -> None:
    """Validate the parameters of a forecast request.

    Raises:
        InvalidParameterError: If one or more validation rules fail.
    """

    errors: List[str] = []

    if series_length <= 0:
        errors.append("Series length must be greater than 0.")
    if window_size < 2:
        errors.append("Window size must be at least 2.")
    if window_size > series_length:
        errors.append("Window size cannot be greater than the series length.")
    if not 0.0 < train_fraction <= 1.0:
        errors.append(
            "Train fraction must be between 0 (exclusive) and 1 (inclusive)."
        )
    elif window_size > int(round(train_fraction * series_length)):
        errors.append(
            "Window size cannot be greater than the training portion "
            "of the series."
        )
    if horizon <= 0:
        errors.append("Horizon must be greater than 0.")
    if not 0.0 < confidence_level < 1.0:
        errors.append(
            "Confidence level must be between 0 (exclusive) and 1 (exclusive)."
        )
    if rank is not None:
        if rank <= 0:
            errors.append("Rank must be greater than 0 when provided.")
        elif rank >= window_size:
            errors.append("Rank must be lower than the window size.")

    if errors:
        raise InvalidParameterError(
            "Forecast parameters are invalid.", details={"errors": errors}
        )


def validate_history_length(history_length: int, series_length: int) -> None:
    """Reject a seeded history too short for the forecast window.

    Raises:
        InvalidParameterError: If a cycle could never gather enough history.
    """

    if history_length < series_length:
        raise InvalidParameterError(
            "Simulation history is shorter than the forecast series length.",
            details={
                "errors": [
                    f"History length {history_length} must be at least the "
                    f"series length {series_length}."
                ]
            },
        )
