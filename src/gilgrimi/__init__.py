"""
Gilgrimi - Youth Suicide-Prevention Counseling Bot

Turn-based counseling bot that walks a user through a short
screening conversation, accumulates a risk score from classified
intents and ends with either a crisis referral or a closing message.

IMPORTANT: This is a safety-critical system. Changes to questions,
thresholds or score deltas require clinical review.
"""

__version__ = "0.1.0"
__author__ = "Gilgrimi Team"
