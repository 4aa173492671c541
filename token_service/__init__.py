"""ERC-20 Token Service.

HTTP service deploying and driving the ``ERC20Test`` token contract on an
Ethereum-compatible network.
"""

__version__ = "0.1.0"
