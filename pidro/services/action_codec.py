"""Parsing actions from hosting-code payloads.

Hosts receive actions as JSON-like dicts, e.g. ``{"type": "bid", "amount": 8}``
or ``{"type": "play_card", "card": "Ah"}``. These request models validate the
payload shape; the rules are still checked by the engine.
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from pidro.models import actions
from pidro.models.card import Card
from pidro.models.enums import Suit


class _ActionRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class BidRequest(_ActionRequest):
    type: Literal["bid"]
    amount: int = Field(..., description="Points bid")

    def to_action(self) -> actions.Bid:
        return actions.Bid(self.amount)


class PassRequest(_ActionRequest):
    type: Literal["pass"]

    def to_action(self) -> actions.Pass:
        return actions.Pass()


class DeclareTrumpRequest(_ActionRequest):
    type: Literal["declare_trump"]
    suit: Suit

    def to_action(self) -> actions.DeclareTrump:
        return actions.DeclareTrump(self.suit)


class PlayCardRequest(_ActionRequest):
    type: Literal["play_card"]
    card: str = Field(..., description="Card notation, e.g. 'Ah'")

    @field_validator("card")
    @classmethod
    def check_card(cls, value: str) -> str:
        Card.parse(value)
        return value

    def to_action(self) -> actions.PlayCard:
        return actions.PlayCard(Card.parse(self.card))


class SelectHandRequest(_ActionRequest):
    type: Literal["select_hand"]
    cards: list[str] = Field(..., description="Card notations the dealer keeps")

    @field_validator("cards")
    @classmethod
    def check_cards(cls, value: list[str]) -> list[str]:
        for text in value:
            Card.parse(text)
        return value

    def to_action(self) -> actions.SelectHand:
        return actions.SelectHand(Card.parse(text) for text in self.cards)


ActionRequest = Annotated[
    BidRequest | PassRequest | DeclareTrumpRequest | PlayCardRequest | SelectHandRequest,
    Field(discriminator="type"),
]

_adapter: TypeAdapter[ActionRequest] = TypeAdapter(ActionRequest)


def parse_action(payload: dict[str, Any]) -> actions.Action:
    """Turn a payload dict into an engine action.

    Raises:
        pydantic.ValidationError: If the payload is malformed

    """
    return _adapter.validate_python(payload).to_action()


def action_to_dict(action: actions.Action) -> dict[str, Any]:
    """Payload form of an action (inverse of ``parse_action``)."""
    if isinstance(action, actions.Bid):
        return {"type": "bid", "amount": action.amount}
    if isinstance(action, actions.Pass):
        return {"type": "pass"}
    if isinstance(action, actions.DeclareTrump):
        return {"type": "declare_trump", "suit": Suit(action.suit).value}
    if isinstance(action, actions.PlayCard):
        return {"type": "play_card", "card": action.card.notation}
    if isinstance(action, actions.SelectHand):
        return {"type": "select_hand", "cards": [card.notation for card in action.cards]}
    raise TypeError(f"Unknown action: {action!r}")
