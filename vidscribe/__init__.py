"""
Vidscribe - video transcription and transactional email helpers.

Downloads a remote video, extracts a compact audio track with FFmpeg and
sends it to the Whisper API for WebVTT subtitles. Also routes outgoing
mail through AWS SES or Resend.
"""

__version__ = "0.1.0"
