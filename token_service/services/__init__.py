"""Module providing the HTTP services of the token service.

Each service package includes blueprints and schemas for the service's domain.

    :mod:`token_service.services.common`
    Module containing generic code used across two or more services. It contains
    common blueprints, metrics instrumentation and schema validators and serializers.

    :mod:`token_service.services.token`
    The token API, deploying and operating the ERC20Test contract.

    :mod:`token_service.services.utils`
    Utilities package supplying service-agnostic objects, such as the factory
    constructing flask apps.

"""
