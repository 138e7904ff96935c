"""flutterly -- local split-view page server with bedrock token helpers.

Serves the split-view page on the loopback interface and wraps two
helper scripts that check and configure the bedrock credential.
"""

__version__ = "0.1.0"
