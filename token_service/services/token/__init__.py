"""HTTP API of the ERC20Test token contract.

All endpoints are served below :data:`token_service.constants.API_PREFIX`.
Parameters may be given as query string, form data or JSON body.

Endpoints operating on a contract accept an optional `contract_address`
parameter. If it is omitted, the most recently deployed or loaded contract
is used.
"""
