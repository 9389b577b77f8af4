"""Output serializers."""

from .routing_formatter import routing_response_to_csv, routing_response_to_json, routing_response_to_text

__all__ = ["routing_response_to_text", "routing_response_to_json", "routing_response_to_csv"]
