"""Exceptions du domaine (validation, introuvable, configuration)."""


class ForecastError(Exception):
    """
    Base exception for all forecast-related domain errors.
    """


class InvalidInputError(ForecastError):
    """
    Raised when a timezone, date, birth time or sign cannot be parsed.
    """


class UserNotFoundError(ForecastError, KeyError):
    """
    Raised when a user identifier is unknown.
    """

    def __init__(self, user_id: str):
        super().__init__(user_id)
        self.user_id = user_id

    def __str__(self) -> str:
        return f"user not found: {self.user_id}"


class ContentConfigurationError(ForecastError):
    """
    Raised when a required content list is missing or empty (deployment defect).
    """
