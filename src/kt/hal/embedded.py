"""\
Embedded representations of a HAL representation, grouped by
link-relation type.

Embedded representations are full documents in their own right, with
links and embedded representations of their own.  When relation types
of an :class:`Embedded` object are resolved using a registry, the
registry is pushed down into every embedded representation so that
CURIEs are applied consistently at all nesting levels.

"""

import collections.abc
import copy

import zope.interface
import zope.interface.interface

import kt.hal.curies
import kt.hal.interfaces


def _embed(representation, rel_registry):
    # Each container owns its representations; never modify one that
    # might still be referenced by another container.
    representation = copy.copy(representation)
    representation.merge_with_embedding(rel_registry)
    return representation


def _is_a(item, as_type):
    if isinstance(as_type, zope.interface.interface.InterfaceClass):
        return as_type.providedBy(item)
    return isinstance(item, as_type)


@zope.interface.implementer(kt.hal.interfaces.IEmbedded)
class Embedded:
    """Immutable collection of embedded representations."""

    def __init__(self, items=(), rel_registry=None):
        """Initialize from embedded representations.

        :param items:
            Mapping from link-relation types to sequences of
            representations, or an iterable of (rel, representations)
            pairs.  Empty sequences are dropped.  If several relation
            types resolve to the same CURIE, the representations are
            combined in order.
        :param rel_registry:
            Registry used to resolve relation types; it is merged into
            the registry of every embedded representation.

        """
        if rel_registry is None:
            rel_registry = kt.hal.curies.default_rel_registry()
        if isinstance(items, collections.abc.Mapping):
            items = items.items()
        buckets = {}
        for rel, representations in items:
            representations = list(representations)
            if not representations:
                continue
            if not rel_registry.is_empty():
                representations = [_embed(rep, rel_registry)
                                   for rep in representations]
            rel = rel_registry.resolve(rel)
            buckets.setdefault(rel, []).extend(representations)
        self._items = {rel: tuple(reps) for rel, reps in buckets.items()}
        self._rel_registry = rel_registry

    @property
    def rel_registry(self):
        return self._rel_registry

    def with_(self, rel, items):
        """Return embedded items with the items for *rel* replaced.

        If *items* is empty, *rel* is removed.

        """
        return copy_of(self).with_(rel, items).build()

    def using(self, rel_registry):
        """Return embedded items with relation types resolved using
        *rel_registry*, recursively.

        Returns this object if the registry does not change anything.

        """
        merged = self._rel_registry.merge_with(rel_registry)
        if merged == self._rel_registry:
            return self
        return Embedded(self._items.items(), merged)

    def get_items_by(self, rel, as_type=None):
        """Return representations embedded for *rel*.

        *rel* may be given as full URI or as CURIE.  If *as_type* is
        provided, it must be a class or a zope interface; only items
        which are instances of the class, or which provide the
        interface, are returned.

        """
        items = self._items.get(self._rel_registry.resolve(rel), ())
        if as_type is None:
            return list(items)
        return [item for item in items if _is_a(item, as_type)]

    def get_rels(self):
        return list(self._items)

    def is_empty(self):
        return not self._items

    def __eq__(self, other):
        if not isinstance(other, Embedded):
            return NotImplemented
        return self._items == other._items

    def __hash__(self):
        return hash(frozenset(self._items.items()))

    def __repr__(self):
        return f'Embedded({self._items!r})'


class EmbeddedBuilder:
    """Accumulates embedded representations for a new :class:`Embedded`.
    """

    def __init__(self, items=(), rel_registry=None):
        self._items = dict(items)
        self._rel_registry = (rel_registry if rel_registry is not None
                              else kt.hal.curies.default_rel_registry())

    @classmethod
    def copy_of(cls, embedded):
        """Create a builder initialized with the content of *embedded*.

        *embedded* may be ``None``, resulting in an empty builder.  The
        original is not modified by changes made using the builder.

        """
        if embedded is None:
            return cls()
        return cls([(rel, embedded.get_items_by(rel))
                    for rel in embedded.get_rels()],
                   embedded.rel_registry)

    def with_(self, rel, items):
        """Set the representations for *rel*, replacing previous ones.

        An empty sequence removes *rel*.

        """
        rel = self._rel_registry.resolve(rel)
        items = list(items)
        if items:
            self._items[rel] = items
        else:
            self._items.pop(rel, None)
        return self

    def using(self, rel_registry):
        self._rel_registry = self._rel_registry.merge_with(rel_registry)
        return self

    def build(self):
        return Embedded(self._items, self._rel_registry)


_empty_embedded = Embedded()


def empty_embedded():
    return _empty_embedded


def embedded(rel, items):
    """Create embedded items for a single link-relation type."""
    return EmbeddedBuilder().with_(rel, items).build()


def embedded_builder():
    return EmbeddedBuilder()


copy_of = EmbeddedBuilder.copy_of
