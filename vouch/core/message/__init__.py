# vouch/core/message/__init__.py
"""
Message building: template rendering and message resolution.
"""

from .builder import MessageBuilder, DEFAULT_MESSAGE_BUILDER, ERROR_MARKER
from .resolvers import (
    MessageResolver,
    DictMessageResolver,
    YamlMessageResolver,
    MessageResolverChain,
    locale_candidates,
    default_resolver,
    chain_resolvers,
)

__all__ = [
    "MessageBuilder",
    "DEFAULT_MESSAGE_BUILDER",
    "ERROR_MARKER",
    "MessageResolver",
    "DictMessageResolver",
    "YamlMessageResolver",
    "MessageResolverChain",
    "locale_candidates",
    "default_resolver",
    "chain_resolvers",
]
