# envindicator/resolver/registry.py
from __future__ import annotations
import copy
import logging
import threading
from typing import Any, Dict, Mapping, Optional, Tuple

from .contracts import LayerContractError, check
from .types import DEFAULT_COLORS, LOCAL, Domain, Layer, RegisteredLayer, default_bases

log = logging.getLogger(__name__)


class Resolver:
    """
    Folds registered override layers over a base value, per domain.

      * `register(domain, layer)` appends; layers run in registration order
      * `resolve(domain)` recomputes on every call, nothing is cached
      * a layer that raises or returns the wrong shape is skipped and the
        previous step's value is kept
    """

    def __init__(self, bases: Mapping[Domain, Any] | None = None) -> None:
        merged = default_bases()
        for domain, value in (bases or {}).items():
            merged[Domain(domain)] = check(Domain(domain), copy.deepcopy(value))
        self._bases: Dict[Domain, Any] = merged
        # tuples are swapped wholesale under the lock, readers iterate a snapshot
        self._layers: Dict[Domain, Tuple[RegisteredLayer, ...]] = {d: () for d in Domain}
        self._lock = threading.Lock()

    def register(self, domain: Domain, layer: Layer, name: Optional[str] = None) -> RegisteredLayer:
        entry = RegisteredLayer(domain=Domain(domain), fn=layer, name=name)
        with self._lock:
            self._layers[entry.domain] = (*self._layers[entry.domain], entry)
        log.debug("registered layer %s for %s", entry.label, entry.domain.value)
        return entry

    def layers(self, domain: Domain) -> Tuple[RegisteredLayer, ...]:
        return self._layers[Domain(domain)]

    def base(self, domain: Domain) -> Any:
        return copy.deepcopy(self._bases[Domain(domain)])

    def resolve(self, domain: Domain) -> Any:
        domain = Domain(domain)
        value = self.base(domain)

        for entry in self._layers[domain]:
            try:
                candidate = entry.fn(copy.deepcopy(value))
            except Exception:
                log.exception("⚠️  Layer %s for %s raised – keeping previous value",
                              entry.label, domain.value)
                continue
            try:
                value = check(domain, candidate)
            except LayerContractError as exc:
                log.warning("⚠️  Discarding output of layer %s for %s: %s",
                            entry.label, domain.value, exc)

        if domain is Domain.COLORS and LOCAL not in value:
            log.warning("🎨 '%s' colour removed by a layer – restoring default %s",
                        LOCAL, DEFAULT_COLORS[LOCAL])
            value[LOCAL] = DEFAULT_COLORS[LOCAL]
        return value
