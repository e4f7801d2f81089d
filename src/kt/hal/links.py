"""\
Links of a HAL representation, grouped by link-relation type.

"""

import zope.interface

import kt.hal.curies
import kt.hal.interfaces
import kt.hal.link


def _link_list(link, more):
    if kt.hal.interfaces.ILink.providedBy(link):
        return [link] + list(more)
    # A sequence of links, possibly followed by more links.
    return list(link) + list(more)


@zope.interface.implementer(kt.hal.interfaces.ILinks)
class Links:
    """Immutable collection of links, by link-relation type.

    Relation types are kept in the order they are first seen; every
    relation type maps to at least one link.  Links declaring CURIEs
    contribute to the registry used to resolve relation types, taking
    precedence over templates from *rel_registry*.

    """

    def __init__(self, links=(), rel_registry=None):
        links = list(links)
        if rel_registry is None:
            rel_registry = kt.hal.curies.default_rel_registry()
        declared = kt.hal.curies.rel_registry(
            [lynk for lynk in links
             if lynk.rel == kt.hal.curies.CURIES_REL])
        rel_registry = declared.merge_with(rel_registry)

        buckets = {}
        for lynk in links:
            rel = rel_registry.resolve(lynk.rel)
            bucket = buckets.setdefault(rel, [])
            if any(lynk.is_equivalent_to(other) for other in bucket):
                continue
            bucket.append(lynk.with_rel(rel))
        self._links = {rel: tuple(bucket) for rel, bucket in buckets.items()}
        self._rel_registry = rel_registry

    @property
    def rel_registry(self):
        return self._rel_registry

    def with_(self, link, *more):
        """Return links with additional links.

        Accepts either links as positional arguments or a sequence of
        links.  Links equivalent to an existing link with the same
        relation type are ignored.

        """
        return Links(list(self) + _link_list(link, more), self._rel_registry)

    def using(self, rel_registry):
        """Return links with relation types resolved by *rel_registry*.

        Our own registry takes precedence over *rel_registry*.  If two
        relation types resolve to the same CURIE, their links are
        combined in the original order.  Returns this object if the
        registry does not change anything.

        """
        merged = self._rel_registry.merge_with(rel_registry)
        if merged == self._rel_registry:
            return self
        return Links(self, merged)

    def get_links_by(self, rel):
        """Return links for *rel*, given either as full URI or as CURIE.

        Returns an empty list if there are no such links.

        """
        return list(self._links.get(self._rel_registry.resolve(rel), ()))

    def get_link_by(self, rel):
        links = self.get_links_by(rel)
        return links[0] if links else None

    def get_rels(self):
        return list(self._links)

    def is_empty(self):
        return not self._links

    def __iter__(self):
        for bucket in self._links.values():
            yield from bucket

    def __eq__(self, other):
        if not isinstance(other, Links):
            return NotImplemented
        return self._links == other._links

    def __hash__(self):
        return hash(frozenset(self._links.items()))

    def __repr__(self):
        return f'Links({self._links!r})'


class LinksBuilder:
    """Accumulates links for a new :class:`Links` object."""

    def __init__(self, links=(), rel_registry=None):
        self._links = list(links)
        self._rel_registry = (rel_registry if rel_registry is not None
                              else kt.hal.curies.default_rel_registry())

    def with_(self, link, *more):
        self._links.extend(_link_list(link, more))
        return self

    def single(self, link, *more):
        """Add links whose relation types must not be present already."""
        for lynk in _link_list(link, more):
            rel = self._rel_registry.resolve(lynk.rel)
            if any(self._rel_registry.resolve(other.rel) == rel
                   for other in self._links):
                raise ValueError(
                    f'links for relation type {lynk.rel!r} already added')
            self._links.append(lynk)
        return self

    def array(self, link, *more):
        """Add links that will be rendered as array, even if single."""
        links = _link_list(link, more)
        self._links.extend(links)
        self._rel_registry = self._rel_registry.merge_with(
            kt.hal.curies.RelRegistry(
                array_rels=[lynk.rel for lynk in links]))
        return self

    def curi(self, name, uri_template):
        """Declare a CURIE for *name* expanding using *uri_template*."""
        self._links.append(kt.hal.link.curi(name, uri_template))
        return self

    def using(self, rel_registry):
        self._rel_registry = self._rel_registry.merge_with(rel_registry)
        return self

    def build(self):
        return Links(self._links, self._rel_registry)


_empty_links = Links()


def empty_links():
    return _empty_links


def linking_to(link, *more):
    """Create links from links passed as arguments or as a sequence."""
    return Links(_link_list(link, more))


def links_builder():
    return LinksBuilder()


def copy_of(links):
    """Create a builder initialized with the content of *links*.

    *links* may be ``None``, resulting in an empty builder.

    """
    if links is None:
        return LinksBuilder()
    return LinksBuilder(links, links.rel_registry)
