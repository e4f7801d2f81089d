"""\
HAL representation of a resource.

See the `HAL specification
<https://datatracker.ietf.org/doc/html/draft-kelly-json-hal-08>`__.

"""

import zope.interface

import kt.hal.curies
import kt.hal.embedded
import kt.hal.interfaces
import kt.hal.links


@zope.interface.implementer(kt.hal.interfaces.IHalRepresentation)
class HalRepresentation:
    """Representation combining links, embedded representations, and
    extra attributes.

    Application-specific representations are expected to derive from
    this class, passing links and embedded items to the constructor or
    adding them with :meth:`with_links` and :meth:`with_embedded`.

    Link-relation types of links and embedded items are always resolved
    using the registry of the representation.  When the representation
    is embedded into another, the registry of the embedding
    representation is merged into ours and relation types are resolved
    again, all the way down.

    """

    def __init__(self, links=None, embedded=None, rel_registry=None,
                 attributes=None):
        """Initialize representation.

        :param links:
            :class:`~kt.hal.links.Links` of the representation, or
            ``None``.  CURIEs declared by the links are added to the
            registry.
        :param embedded:
            :class:`~kt.hal.embedded.Embedded` representations, or
            ``None``.
        :param rel_registry:
            :class:`~kt.hal.curies.RelRegistry` used to resolve relation
            types; defaults to the empty registry.
        :param attributes:
            Mapping of extra attribute names to JSON-compatible values.

        """
        if rel_registry is None:
            rel_registry = kt.hal.curies.default_rel_registry()
        if links is None or links.is_empty():
            links = None
        else:
            links = links.using(rel_registry)
            rel_registry = links.rel_registry
        if embedded is None or embedded.is_empty():
            embedded = None
        else:
            embedded = embedded.using(rel_registry)
        self._rel_registry = rel_registry
        self._links = links
        self._embedded = embedded
        self._attributes = dict(attributes or {})

    @property
    def rel_registry(self):
        return self._rel_registry

    def links(self):
        if self._links is None:
            return kt.hal.links.empty_links()
        return self._links

    def embedded(self):
        if self._embedded is None:
            return kt.hal.embedded.empty_embedded()
        return self._embedded

    def attributes(self):
        """Return extra attributes not modeled by the representation."""
        return dict(self._attributes)

    def attribute(self, name):
        return self._attributes.get(name)

    def with_links(self, link, *more):
        """Add links to the representation.

        Accepts either links as positional arguments or a sequence of
        links.  Links equivalent to existing links are not added.
        Returns the representation.

        """
        if self._links is not None:
            self._links = self._links.with_(link, *more)
        else:
            self._links = kt.hal.links.links_builder().using(
                self._rel_registry).with_(link, *more).build()
        self._rel_registry = self._links.rel_registry
        if self._embedded is not None:
            self._embedded = self._embedded.using(self._rel_registry)
        return self

    def with_embedded(self, rel, items):
        """Add or replace the embedded items for *rel*.

        An empty sequence of items removes *rel*.  Returns the
        representation.

        """
        embedded = kt.hal.embedded.copy_of(self._embedded).with_(
            rel, items).using(self._rel_registry).build()
        self._embedded = None if embedded.is_empty() else embedded
        return self

    def merge_with_embedding(self, rel_registry):
        """Merge *rel_registry* from the embedding representation into
        ours and resolve relation types of links and embedded items.

        Returns the representation.

        """
        self._rel_registry = self._rel_registry.merge_with(rel_registry)
        if self._links is not None:
            self._links = self._links.using(rel_registry)
            if self._embedded is not None:
                self._embedded = self._embedded.using(self._rel_registry)
        elif self._embedded is not None:
            self._embedded = self._embedded.using(rel_registry)
        return self

    def __eq__(self, other):
        if self is other:
            return True
        if other is None or self.__class__ is not other.__class__:
            return False
        return (self._links == other._links
                and self._embedded == other._embedded)

    def __hash__(self):
        return hash((self._links, self._embedded))

    def __repr__(self):
        return (f'{self.__class__.__name__}(links={self._links!r},'
                f' embedded={self._embedded!r})')
