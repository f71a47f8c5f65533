"""Engine configuration using Pydantic settings."""

from dataclasses import dataclass

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from pidro.constants import FINAL_HAND_SIZE, INITIAL_HAND_SIZE, MAX_BID, MIN_BID, WINNING_SCORE


class Settings(BaseSettings):
    """Engine settings loaded from environment variables (``PIDRO_*``)."""

    model_config = SettingsConfigDict(
        env_prefix="PIDRO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Root log level")

    # Rules
    winning_score: int = Field(default=WINNING_SCORE, ge=1, description="Score that ends the game")
    min_bid: int = Field(default=MIN_BID, description="Lowest legal bid")
    max_bid: int = Field(default=MAX_BID, description="Highest legal bid")
    initial_hand_size: int = Field(default=INITIAL_HAND_SIZE, description="Cards per seat in the first deal")
    final_hand_size: int = Field(default=FINAL_HAND_SIZE, description="Cards per seat after the second deal")
    auto_dealer_rob: bool = Field(default=False, description="Let the engine pick the dealer's six cards")
    two_of_trump_keeps_point: bool = Field(
        default=False, description="The trump 2 scores for the team that played it"
    )


@dataclass(frozen=True)
class GameConfig:
    """Rule configuration fixed for the lifetime of one game."""

    winning_score: int = WINNING_SCORE
    min_bid: int = MIN_BID
    max_bid: int = MAX_BID
    initial_hand_size: int = INITIAL_HAND_SIZE
    final_hand_size: int = FINAL_HAND_SIZE
    auto_dealer_rob: bool = False
    two_of_trump_keeps_point: bool = False

    @classmethod
    def from_settings(cls, source: Settings | None = None) -> "GameConfig":
        """Build a game config from application settings.

        Args:
            source: Settings to read, defaults to the global instance

        Returns:
            Frozen game configuration

        """
        source = source or settings
        return cls(
            winning_score=source.winning_score,
            min_bid=source.min_bid,
            max_bid=source.max_bid,
            initial_hand_size=source.initial_hand_size,
            final_hand_size=source.final_hand_size,
            auto_dealer_rob=source.auto_dealer_rob,
            two_of_trump_keeps_point=source.two_of_trump_keeps_point,
        )


# Global settings instance
settings = Settings()
