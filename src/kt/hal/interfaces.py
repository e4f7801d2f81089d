"""\
Interfaces for HAL representations of application objects.

"""

import typing

import zope.interface
import zope.interface.common.interfaces
import zope.interface.common.sequence
import zope.schema
import zope.schema.interfaces


# --------------------
# Exception interfaces


class IInvalidCuriTemplate(zope.interface.common.interfaces.IException):
    """Interface for InvalidCuriTemplate instances."""

    field = zope.schema.Object(
        description='Field which failed validation',
        schema=zope.schema.interfaces.IField,
        required=True,
    )

    value = zope.interface.Attribute("Template determined to be invalid")


class IInvalidDocumentStructure(zope.interface.common.interfaces.IValueError):
    """Interface for InvalidDocumentStructure instances."""

    kind = zope.schema.TextLine(
        description='Name of the HAL structure that could not be decoded',
        required=True,
    )


# ----------
# Exceptions


@zope.interface.implementer(IInvalidCuriTemplate)
class InvalidCuriTemplate(zope.schema.interfaces.ValidationError):
    """CURIE template must contain exactly one {rel} placeholder."""


@zope.interface.implementer(IInvalidDocumentStructure)
class InvalidDocumentStructure(ValueError):
    """Document does not have a valid HAL structure."""

    def __init__(self, kind, detail=None):
        """Construct exception for a specific *kind* of structure.

        *kind* should be one of ``resource``, ``links``, ``link``, or
        ``embedded``.

        """
        super(InvalidDocumentStructure, self).__init__(kind)
        self.kind = kind
        self.detail = detail

    def __str__(self):
        message = f'document contains invalid structure for {self.kind}'
        if self.detail:
            message = f'{message}: {self.detail}'
        return message


# -----------------
# Field definitions


REL_PLACEHOLDER = '{rel}'


class URL(zope.schema.TextLine):

    def __init__(self, title=None, description=None, min_length=None,
                 **kwargs):
        kwargs.update(
            title=(title or 'URL'),
            description=(description or 'Absolute or relative URL'),
            min_length=(min_length or 1),
        )
        super(URL, self).__init__(**kwargs)


class LinkRelationType(zope.schema.TextLine):
    """Link-relation type: a keyword, an absolute URI, or a CURIE."""

    def __init__(self, **kwargs):
        kwargs.setdefault('title', 'Link-relation type')
        kwargs.setdefault('min_length', 1)
        super(LinkRelationType, self).__init__(**kwargs)


class CuriURITemplate(URL):
    """URI template for a CURIE, as used by HAL.

    The template must contain the ``{rel}`` placeholder exactly once.

    Raises :exc:`InvalidCuriTemplate` when constraints are not satisfied.

    """

    def constraint(self, value):
        if value.count(REL_PLACEHOLDER) != 1:
            raise InvalidCuriTemplate().with_field_and_value(self, value)
        else:
            return True


class CuriPrefix(zope.schema.TextLine):

    def __init__(self, **kwargs):
        kwargs.setdefault('title', 'Prefix')
        kwargs.setdefault('min_length', 1)
        super(CuriPrefix, self).__init__(**kwargs)

    def constraint(self, value):
        return ':' not in value and super(CuriPrefix, self).constraint(value)


# ---------------------------------------------
# Interfaces used when everything is going well


class ILink(zope.interface.Interface):

    rel = LinkRelationType(
        description='The :rfc:`8288` relationship type of the link.',
        required=True,
        readonly=True,
    )

    href = URL(
        description='Target URI, or URI template if *templated* is true.',
        required=True,
        readonly=True,
    )

    templated = zope.schema.Bool(
        description='Indicates that *href* is a :rfc:`6570` URI template.',
        default=False,
        required=True,
        readonly=True,
    )

    type = zope.schema.TextLine(
        description='Media type of the document referenced by *href*.',
        min_length=3,
        required=False,
        missing_value=None,
        readonly=True,
    )

    hreflang = zope.schema.TextLine(
        description='Language of the target resource (:rfc:`5646`).',
        required=False,
        missing_value=None,
        readonly=True,
    )

    title = zope.schema.TextLine(
        description='''
            Human-facing title for the link, possibly suitable as a
            menu entry.  This is not necessarily the title of the
            linked document.
        ''',
        min_length=1,
        required=False,
        missing_value=None,
        readonly=True,
    )

    name = zope.schema.TextLine(
        description='''
            Secondary key for selecting links sharing a relation type.
            For CURIEs, this is the prefix.
        ''',
        min_length=1,
        required=False,
        missing_value=None,
        readonly=True,
    )

    profile = zope.schema.TextLine(
        description='URI hinting at the profile of the target resource.',
        required=False,
        missing_value=None,
        readonly=True,
    )

    deprecation = zope.schema.TextLine(
        description='URL providing information about the deprecation.',
        required=False,
        missing_value=None,
        readonly=True,
    )

    def is_equivalent_to(other) -> bool:
        """Return true if *other* has the same *href* and *name*."""

    def with_rel(rel) -> 'ILink':
        """Return a copy of the link with a different relation type."""


class ICuriTemplate(zope.interface.Interface):

    prefix = CuriPrefix(
        description='Prefix of the compact URIs, without the colon.',
        required=True,
        readonly=True,
    )

    uri_template = CuriURITemplate(
        description='Template used to expand the local part of a CURIE.',
        required=True,
        readonly=True,
    )

    def matches(uri) -> bool:
        """Return true if *uri* can be shortened using this template."""

    def expand(local_name) -> str:
        """Return the full URI for *local_name*."""

    def curied_rel(uri) -> str:
        """Return the CURIE for *uri*, or *uri* if it does not match."""

    def expanded_rel(rel) -> str:
        """Return the full URI for a CURIE with this prefix, or *rel*."""


class IRelRegistry(zope.interface.Interface):
    """Ordered set of CURIE templates plus link-relation types that
    are always rendered as arrays.

    Templates are keyed by prefix; the first matching template wins.

    """

    def resolve(rel) -> str:
        """Return the shortest known form of *rel*.

        Resolution is idempotent.

        """

    def expand(rel) -> str:
        """Return the full URI of a curied *rel*, or *rel* unchanged."""

    def merge_with(other) -> 'IRelRegistry':
        """Return a registry holding our templates, followed by those
        of *other* with prefixes we do not know.
        """

    def is_array_rel(rel) -> bool:
        """Return true if links for *rel* should be rendered as array."""

    def is_empty() -> bool:
        """Return true if no templates or array rels are registered."""


class ILinks(zope.interface.Interface):
    """Immutable mapping of link-relation types to non-empty sequences
    of :class:`ILink` objects.

    Relation types retain the order in which they were first seen.

    """

    rel_registry = zope.schema.Object(
        description='Registry used to resolve relation types.',
        schema=IRelRegistry,
        required=True,
        readonly=True,
    )

    def with_(link, *more) -> 'ILinks':
        """Return new links including the given links."""

    def using(rel_registry) -> 'ILinks':
        """Return links with relation types resolved by *rel_registry*."""

    def get_links_by(rel) -> typing.List[ILink]:
        """Return links for *rel*, possibly empty."""

    def get_rels() -> typing.List[str]:
        """Return relation types in order."""

    def is_empty() -> bool:
        """Return true if there are no links."""


class IEmbedded(zope.interface.Interface):
    """Immutable mapping of link-relation types to non-empty sequences
    of :class:`IHalRepresentation` objects.

    """

    rel_registry = zope.schema.Object(
        description='Registry used to resolve relation types.',
        schema=IRelRegistry,
        required=True,
        readonly=True,
    )

    def with_(rel, items) -> 'IEmbedded':
        """Return new embedded items with the items for *rel* replaced."""

    def using(rel_registry) -> 'IEmbedded':
        """Return embedded items with relation types resolved by
        *rel_registry*, recursively.
        """

    def get_items_by(rel, as_type=None) -> typing.List['IHalRepresentation']:
        """Return items for *rel*, possibly empty.

        If *as_type* is a class or an interface, only items which are
        instances of the class or which provide the interface are
        returned.

        """

    def get_rels() -> typing.List[str]:
        """Return relation types in order."""

    def is_empty() -> bool:
        """Return true if there are no embedded items."""


class IHalRepresentation(zope.interface.Interface):

    rel_registry = zope.schema.Object(
        description='Registry used to resolve relation types.',
        schema=IRelRegistry,
        required=True,
        readonly=True,
    )

    def links() -> ILinks:
        """Return links of the representation; may be empty."""

    def embedded() -> IEmbedded:
        """Return embedded items of the representation; may be empty."""

    def attributes() -> typing.Dict[str, typing.Any]:
        """Return mapping of extra attribute names to JSON values."""

    def attribute(name) -> typing.Any:
        """Return value of the extra attribute *name*, or None."""

    def merge_with_embedding(rel_registry) -> 'IHalRepresentation':
        """Merge the registry of the embedding representation into ours
        and update relation types of links and embedded items.
        """


class IError(IHalRepresentation):
    """Presentation of a single error as a `vnd.error`_ document.

    .. _vnd.error: https://github.com/blongden/vnd.error

    """

    message = zope.schema.Text(
        title='Message',
        description='Human-facing description of the problem',
        required=True,
    )

    logref = zope.schema.TextLine(
        title='Log reference',
        description='Identifier of this instance of a problem',
        required=False,
        missing_value=None,
    )

    path = zope.schema.TextLine(
        title='Path',
        description='JSON Pointer to the field of the request in error',
        required=False,
        missing_value=None,
    )

    status = zope.schema.Int(
        title='Status code',
        description='HTTP status code; not part of the document',
        min=400,
        max=599,
        required=False,
        missing_value=None,
    )


class IErrors(zope.interface.common.sequence.IMinimalSequence):
    """Interface representing a collection of `IError` instances.

    When generating an error response from an exception, the exception
    will be adapted to this interface if possible.  On success, each
    entry will be embedded as ``errors`` in the generated response.

    This sequence cannot be empty.

    """
