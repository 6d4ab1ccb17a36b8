"""
Segment codecs.

Base64url without padding for every token segment, plus a hex mode that
decodes hex text to bytes before encoding.
"""
