"""\
HAL+JSON serialization for representations.

The serialization functions accept objects that are adaptable to the
interfaces defined in ``kt.hal.interfaces`` and convert to simple
JSON-friendly Python structures.  The parsing functions perform the
reverse, creating representations from decoded JSON documents.

"""

import collections.abc

import zope.schema.interfaces

import kt.hal.curies
import kt.hal.embedded
import kt.hal.interfaces
import kt.hal.link
import kt.hal.links
import kt.hal.representation


LINKS = '_links'
EMBEDDED = '_embedded'

_optional_link_fields = ('type', 'hreflang', 'title', 'name', 'profile',
                         'deprecation')


# -------------
# Serialization


def link(lynk):
    ob = kt.hal.interfaces.ILink(lynk)
    d = dict(href=ob.href)
    if ob.templated:
        d['templated'] = True
    for fname in _optional_link_fields:
        value = getattr(ob, fname)
        if value:
            d[fname] = value
    return d


def links(lnks):
    lnks = kt.hal.interfaces.ILinks(lnks)
    registry = lnks.rel_registry
    r = dict()
    for rel in lnks.get_rels():
        seq = [link(lynk) for lynk in lnks.get_links_by(rel)]
        if (len(seq) > 1 or rel == kt.hal.curies.CURIES_REL
                or registry.is_array_rel(rel)):
            r[rel] = seq
        else:
            r[rel] = seq[0]
    return r


def embedded(emb):
    emb = kt.hal.interfaces.IEmbedded(emb)
    return {rel: [representation(item) for item in emb.get_items_by(rel)]
            for rel in emb.get_rels()}


def representation(ob):
    """Return JSON-friendly structure for a representation.

    ``_links`` and ``_embedded`` are omitted if empty.

    """
    ob = kt.hal.interfaces.IHalRepresentation(ob)
    r = dict()
    d = links(ob.links())
    if d:
        r[LINKS] = d
    for name, value in ob.attributes().items():
        if name not in (LINKS, EMBEDDED):
            r[name] = value
    d = embedded(ob.embedded())
    if d:
        r[EMBEDDED] = d
    return r


# -------
# Parsing


def _ismap(ob):
    return isinstance(ob, collections.abc.Mapping)


def _detail(exc):
    if isinstance(exc, zope.schema.interfaces.ValidationError):
        return exc.doc()
    return str(exc)


def _as_list(value):
    return value if isinstance(value, list) else [value]


def parse_link(rel, data):
    if not _ismap(data):
        raise kt.hal.interfaces.InvalidDocumentStructure(
            'link', f'link for {rel!r} must be an object')
    href = data.get('href')
    if not isinstance(href, str):
        raise kt.hal.interfaces.InvalidDocumentStructure(
            'link', f'link for {rel!r} must have an href string')
    templated = data.get('templated', False)
    if not isinstance(templated, bool):
        raise kt.hal.interfaces.InvalidDocumentStructure(
            'link', f'templated flag for {rel!r} must be a boolean')
    kwargs = {}
    for fname in _optional_link_fields:
        value = data.get(fname)
        if value is not None:
            if not isinstance(value, str):
                raise kt.hal.interfaces.InvalidDocumentStructure(
                    'link', f'{fname} of link for {rel!r} must be a string')
            kwargs[fname] = value
    try:
        return kt.hal.link.Link(rel, href, templated=templated, **kwargs)
    except zope.schema.interfaces.ValidationError as e:
        raise kt.hal.interfaces.InvalidDocumentStructure(
            'link', f'invalid link for {rel!r}: {_detail(e)}') from e


def parse_links(data):
    """Create :class:`~kt.hal.links.Links` from a decoded ``_links``
    object.

    Relation types given as arrays are registered as array relation
    types, so serializing again produces the same structure.

    """
    if not _ismap(data):
        raise kt.hal.interfaces.InvalidDocumentStructure(
            'links', f'{LINKS} must be an object')
    parsed = []
    array_rels = []
    for rel, value in data.items():
        if isinstance(value, list):
            array_rels.append(rel)
        parsed.extend(parse_link(rel, item) for item in _as_list(value))
    try:
        return kt.hal.links.Links(
            parsed, kt.hal.curies.RelRegistry(array_rels=array_rels))
    except (zope.schema.interfaces.ValidationError, ValueError) as e:
        raise kt.hal.interfaces.InvalidDocumentStructure(
            'link', _detail(e)) from e


def parse(document, factory=None, embedded_types=None, rel_registry=None):
    """Create a representation from a decoded HAL document.

    :param document:  Mapping decoded from JSON.
    :param factory:
        Callable creating the representation, accepting *links*,
        *embedded*, *rel_registry*, and *attributes* keyword arguments.
        Defaults to :class:`~kt.hal.representation.HalRepresentation`.
    :param embedded_types:
        Mapping from link-relation types (full URIs or CURIEs) to
        factories used for embedded representations of that type, at
        any level of nesting.
    :param rel_registry:
        Additional registry to resolve link-relation types; CURIEs
        declared in the document take precedence.

    Raises :exc:`~kt.hal.interfaces.InvalidDocumentStructure` if
    *document* is not a valid HAL document.

    """
    if factory is None:
        factory = kt.hal.representation.HalRepresentation
    if not _ismap(document):
        raise kt.hal.interfaces.InvalidDocumentStructure(
            'resource', 'resource must be an object')
    embedded_types = dict(embedded_types or {})

    lnks = None
    if document.get(LINKS) is not None:
        lnks = parse_links(document[LINKS])
    registry = lnks.rel_registry if lnks is not None else (
        kt.hal.curies.default_rel_registry())
    if rel_registry is not None:
        registry = registry.merge_with(rel_registry)

    emb = None
    if document.get(EMBEDDED) is not None:
        data = document[EMBEDDED]
        if not _ismap(data):
            raise kt.hal.interfaces.InvalidDocumentStructure(
                'embedded', f'{EMBEDDED} must be an object')
        types = {registry.resolve(rel): item_factory
                 for rel, item_factory in embedded_types.items()}
        builder = kt.hal.embedded.embedded_builder()
        for rel, value in data.items():
            item_factory = types.get(registry.resolve(rel))
            items = []
            for item in _as_list(value):
                if not _ismap(item):
                    raise kt.hal.interfaces.InvalidDocumentStructure(
                        'embedded',
                        f'embedded items for {rel!r} must be objects')
                items.append(parse(item, factory=item_factory,
                                   embedded_types=embedded_types))
            builder.with_(rel, items)
        emb = builder.build()

    attributes = {name: value for name, value in document.items()
                  if name not in (LINKS, EMBEDDED)}
    return factory(links=lnks, embedded=emb, rel_registry=registry,
                   attributes=attributes)
