"""\
Support for compact URIs (CURIEs) as link-relation types.

HAL documents declare CURIEs using links with the ``curies`` relation
type; each such link has the prefix as its *name* and a URI template
containing a ``{rel}`` placeholder as its *href*::

    "_links": {
        "curies": [{
            "name": "ex",
            "href": "http://example.com/rels/{rel}",
            "templated": true
        }],
        "ex:product": {"href": "/products/42"}
    }

A :class:`RelRegistry` holds the templates in effect for a
representation and shortens full link-relation URIs such as
``http://example.com/rels/product`` to ``ex:product``.

"""

import logging

import zope.interface
import zope.schema.fieldproperty

import kt.hal.interfaces


CURIES_REL = 'curies'
"""Link-relation type of the links declaring CURIEs."""

logger = logging.getLogger(__name__)


@zope.interface.implementer(kt.hal.interfaces.ICuriTemplate)
class CuriTemplate:
    """Single CURIE template.

    A URI matches the template if it starts with the text before the
    ``{rel}`` placeholder, ends with the text after it, and the part in
    between is non-empty and contains no ``/``.

    """

    prefix = zope.schema.fieldproperty.FieldProperty(
        kt.hal.interfaces.ICuriTemplate['prefix'])
    uri_template = zope.schema.fieldproperty.FieldProperty(
        kt.hal.interfaces.ICuriTemplate['uri_template'])

    def __init__(self, prefix, uri_template):
        self.prefix = prefix
        self.uri_template = uri_template
        self._head, _, self._tail = uri_template.partition(
            kt.hal.interfaces.REL_PLACEHOLDER)

    def _local_name(self, uri):
        end = len(uri) - len(self._tail)
        if end <= len(self._head):
            return None
        if not (uri.startswith(self._head) and uri.endswith(self._tail)):
            return None
        local_name = uri[len(self._head):end]
        if '/' in local_name:
            return None
        return local_name

    def matches(self, uri):
        return self._local_name(uri) is not None

    def expand(self, local_name):
        return self.uri_template.replace(
            kt.hal.interfaces.REL_PLACEHOLDER, local_name)

    def curied_rel(self, uri):
        local_name = self._local_name(uri)
        if local_name is None:
            return uri
        return f'{self.prefix}:{local_name}'

    def expanded_rel(self, rel):
        prefix, sep, local_name = rel.partition(':')
        if sep and prefix == self.prefix and local_name:
            return self.expand(local_name)
        return rel

    def __eq__(self, other):
        if not isinstance(other, CuriTemplate):
            return NotImplemented
        return (self.prefix, self.uri_template) == (other.prefix,
                                                     other.uri_template)

    def __hash__(self):
        return hash((self.prefix, self.uri_template))

    def __repr__(self):
        return f'CuriTemplate({self.prefix!r}, {self.uri_template!r})'


@zope.interface.implementer(kt.hal.interfaces.IRelRegistry)
class RelRegistry:
    """Registry of CURIE templates and array link-relation types.

    Registries are immutable; :meth:`merge_with` creates a new registry.

    """

    def __init__(self, curies=(), array_rels=()):
        """Initialize from CURIE templates and array relation types.

        :param curies:
            Iterable of :class:`CuriTemplate` objects.  Order is
            significant: when more than one template matches a URI, the
            first one wins.  Only the first template for a prefix is
            kept.
        :param array_rels:
            Link-relation types whose links are always rendered as a
            JSON array, even if there is only a single link.

        """
        templates = {}
        for template in curies:
            templates.setdefault(template.prefix, template)
        self._templates = templates
        self._array_rels = tuple(dict.fromkeys(array_rels))

    def curies(self):
        return tuple(self._templates.values())

    def array_rels(self):
        return self._array_rels

    def is_empty(self):
        return not (self._templates or self._array_rels)

    @staticmethod
    def _curie_prefix(rel):
        prefix, sep, reference = rel.partition(':')
        if not sep or reference.startswith('//'):
            return None
        return prefix

    def resolve(self, rel):
        """Return the curied form of *rel* if a template matches.

        Keywords (no colon) and CURIEs using a registered prefix are
        returned unchanged, so resolving a resolved value is a no-op.
        Hierarchical URIs (``scheme://...``) are never taken for
        CURIEs, even if the scheme is a registered prefix.

        """
        if ':' not in rel or self._curie_prefix(rel) in self._templates:
            return rel
        for template in self._templates.values():
            curied = template.curied_rel(rel)
            if curied != rel:
                return curied
        return rel

    def expand(self, rel):
        template = self._templates.get(self._curie_prefix(rel))
        if template is None:
            return rel
        return template.expanded_rel(rel)

    def merge_with(self, other):
        """Return a registry with our templates followed by the
        templates of *other* for prefixes we do not know yet.

        Array relation types of both registries are combined.

        """
        if other is self or other.is_empty():
            return self
        if self.is_empty():
            return other
        return RelRegistry(self.curies() + other.curies(),
                           self._array_rels + other.array_rels())

    def is_array_rel(self, rel):
        if not self._array_rels:
            return False
        resolved = self.resolve(rel)
        return any(arel == rel or self.resolve(arel) == resolved
                   for arel in self._array_rels)

    def __eq__(self, other):
        if not isinstance(other, RelRegistry):
            return NotImplemented
        return (self.curies() == other.curies()
                and set(self._array_rels) == set(other.array_rels()))

    def __hash__(self):
        return hash((self.curies(), frozenset(self._array_rels)))

    def __repr__(self):
        return (f'RelRegistry(curies={list(self.curies())!r},'
                f' array_rels={list(self._array_rels)!r})')


_default_rel_registry = RelRegistry()


def default_rel_registry():
    """Return the empty registry, which resolves every rel to itself."""
    return _default_rel_registry


def rel_registry(curi_links, array_rels=()):
    """Create a registry from links declaring CURIEs.

    :param curi_links:
        Iterable of :class:`~kt.hal.interfaces.ILink` objects with the
        relation type ``curies``.  The *name* of each link is used as
        prefix, the *href* as URI template.
    :param array_rels:
        Link-relation types to always render as arrays.

    """
    templates = []
    prefixes = set()
    for lynk in curi_links:
        if lynk.rel != CURIES_REL:
            raise ValueError(
                f'link with relation type {lynk.rel!r} does not declare'
                f' a CURIE')
        if not lynk.name:
            raise ValueError(
                f'CURIE link for {lynk.href!r} must have a name')
        if lynk.name in prefixes:
            logger.debug('ignoring duplicate CURIE prefix %r for %r',
                         lynk.name, lynk.href)
            continue
        prefixes.add(lynk.name)
        templates.append(CuriTemplate(lynk.name, lynk.href))
    return RelRegistry(templates, array_rels)
