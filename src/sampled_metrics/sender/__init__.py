"""HTTP transport module for sending metric batches to the collector."""

from .http_sender import Completion, HTTPSender, SenderConfig, SendResponse, Transport, TransportError

__all__ = ["Transport", "Completion", "HTTPSender", "SenderConfig", "SendResponse", "TransportError"]
