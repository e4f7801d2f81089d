"""\
Implementation of a simple HAL link object.

"""

import zope.interface
import zope.schema.fieldproperty

import kt.hal.curies
import kt.hal.interfaces


_FIELDS = ('rel', 'href', 'templated', 'type', 'hreflang', 'title',
           'name', 'profile', 'deprecation')


@zope.interface.implementer(kt.hal.interfaces.ILink)
class Link:
    """Utility object representing a HAL link.

    Links are immutable; field values are validated against
    :class:`~kt.hal.interfaces.ILink` when the link is created.

    """

    rel = zope.schema.fieldproperty.FieldProperty(
        kt.hal.interfaces.ILink['rel'])
    href = zope.schema.fieldproperty.FieldProperty(
        kt.hal.interfaces.ILink['href'])
    templated = zope.schema.fieldproperty.FieldProperty(
        kt.hal.interfaces.ILink['templated'])
    type = zope.schema.fieldproperty.FieldProperty(
        kt.hal.interfaces.ILink['type'])
    hreflang = zope.schema.fieldproperty.FieldProperty(
        kt.hal.interfaces.ILink['hreflang'])
    title = zope.schema.fieldproperty.FieldProperty(
        kt.hal.interfaces.ILink['title'])
    name = zope.schema.fieldproperty.FieldProperty(
        kt.hal.interfaces.ILink['name'])
    profile = zope.schema.fieldproperty.FieldProperty(
        kt.hal.interfaces.ILink['profile'])
    deprecation = zope.schema.fieldproperty.FieldProperty(
        kt.hal.interfaces.ILink['deprecation'])

    def __init__(self, rel, href, templated=False, type=None, hreflang=None,
                 title=None, name=None, profile=None, deprecation=None):
        """Initialize link with relation type, href and optional metadata.

        :param rel:
            The :rfc:`8288` relationship type of the link.
        :param href:
            URL reference of the link target, or a URI template if
            *templated* is true.
        :param templated:
            Indicates whether *href* is a :rfc:`6570` URI template.
        :param type:
            Media type of the document referenced by *href*.
        :param hreflang:
            Language of the target resource, conforming to :rfc:`5646`.
        :param title:
            Human-facing title for the link.
        :param name:
            Secondary key used to select among links sharing *rel*.
        :param profile:
            URI hinting at the profile of the target resource.
        :param deprecation:
            URL providing information about the deprecation of the link.

        """
        self.rel = rel
        self.href = href
        self.templated = templated
        self.type = type
        self.hreflang = hreflang
        self.title = title
        self.name = name
        self.profile = profile
        self.deprecation = deprecation

    def is_equivalent_to(self, other):
        """Links are equivalent if *href* and *name* are the same.

        Equivalent links are not added to a
        :class:`~kt.hal.links.Links` twice.

        """
        return self.href == other.href and self.name == other.name

    def with_rel(self, rel):
        if rel == self.rel:
            return self
        values = self._values()
        values['rel'] = rel
        return self.__class__(**values)

    def _values(self):
        return {fname: getattr(self, fname) for fname in _FIELDS}

    def __eq__(self, other):
        if not isinstance(other, Link):
            return NotImplemented
        return self._values() == other._values()

    def __hash__(self):
        return hash(tuple(getattr(self, fname) for fname in _FIELDS))

    def __repr__(self):
        parts = [f'rel={self.rel!r}', f'href={self.href!r}']
        for fname in _FIELDS[2:]:
            value = getattr(self, fname)
            if value:
                parts.append(f'{fname}={value!r}')
        return f'Link({", ".join(parts)})'


def link(rel, href, **kwargs):
    """Create a link for *rel*; *kwargs* supply optional metadata."""
    return Link(rel, href, **kwargs)


def self_link(href):
    return Link('self', href)


def item(href):
    return Link('item', href)


def templated_link(rel, href_template, **kwargs):
    return Link(rel, href_template, templated=True, **kwargs)


def curi(name, uri_template):
    """Create a link declaring a CURIE.

    :param name:  Prefix of the CURIE.
    :param uri_template:
        Template containing the ``{rel}`` placeholder.  Raises
        :exc:`~kt.hal.interfaces.InvalidCuriTemplate` if the placeholder
        is missing.

    """
    kt.hal.interfaces.CuriURITemplate(__name__='href').validate(uri_template)
    return Link(kt.hal.curies.CURIES_REL, uri_template, templated=True,
                name=name)
