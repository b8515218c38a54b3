"""Link strategy registry."""

from __future__ import annotations

from dep_linker.models import LinkerConfig, LinkStrategyKind
from dep_linker.strategy.base import BaseLinkStrategy
from dep_linker.strategy.npm_link import NpmLinkStrategy
from dep_linker.strategy.symlink import SymlinkStrategy

_STRATEGIES: dict[LinkStrategyKind, type[BaseLinkStrategy]] = {
    LinkStrategyKind.NPM_LINK: NpmLinkStrategy,
    LinkStrategyKind.SYMLINK: SymlinkStrategy,
}


def get_strategy(kind: LinkStrategyKind, config: LinkerConfig | None = None) -> BaseLinkStrategy:
    """Create the strategy selected for this run."""
    strategy_cls = _STRATEGIES.get(kind)
    if strategy_cls is None:
        raise ValueError(f"No link strategy for: {kind}")
    return strategy_cls(config)


__all__ = ["BaseLinkStrategy", "NpmLinkStrategy", "SymlinkStrategy", "get_strategy"]
