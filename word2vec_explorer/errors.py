"""Failure categories raised while fetching and validating related words."""

from __future__ import annotations

from typing import Optional


class WordRelationError(RuntimeError):
    """Base class for every failure the word-relation flow reports.

    ``user_message`` is the text shown to the user. ``str(err)`` may carry
    more detail for logs.
    """

    category = "error"
    retriable = True
    default_message = "An error occurred while analyzing word relations."

    def __init__(self, detail: Optional[str] = None, user_message: Optional[str] = None) -> None:
        self.detail = detail
        self.user_message = user_message or self.default_message
        super().__init__(detail or self.user_message)


class EmptyInput(WordRelationError):
    category = "empty_input"
    default_message = "Please enter a word to analyze."


class ClientNotConfigured(WordRelationError):
    category = "not_configured"
    retriable = False
    default_message = (
        "The API key is not set. Set the GEMINI_API_KEY environment variable "
        "to run the application."
    )


class TransportFailure(WordRelationError):
    category = "transport"
    default_message = "The generative API request failed."


class AuthenticationFailure(TransportFailure):
    category = "authentication"
    default_message = "The provided API key is not valid. Please check it and try again."


class MalformedResponse(WordRelationError):
    category = "malformed_response"
    retriable = False
    default_message = "The API response could not be parsed as JSON."


class InvalidShape(WordRelationError):
    category = "invalid_shape"
    retriable = False
    default_message = "The API response was not in the expected JSON format."
