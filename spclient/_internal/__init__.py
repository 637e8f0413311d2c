"""Internal modules for the spclient SDK.

These are not intended for direct use in application code.

Modules:
    http - Shared HTTP client configuration and URL handling
    request - Immutable request descriptors
    retry - Exponential backoff for transport errors
    wire - Strict protobuf wire-format checks
"""
