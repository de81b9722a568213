"""AI gateway module."""

from .gateway import AIGateway, IAIGateway, ISpeechSynthesizer

__all__ = ["AIGateway", "IAIGateway", "ISpeechSynthesizer"]
