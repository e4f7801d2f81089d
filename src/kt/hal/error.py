"""\
Definition of convenient :class:`~kt.hal.interfaces.IError` &
:class:`~kt.hal.interfaces.IErrors` implementations.

Errors are rendered as `vnd.error <https://github.com/blongden/vnd.error>`__
documents, which are HAL representations themselves.

"""

import typing

import werkzeug.exceptions
import zope.component
import zope.interface
import zope.interface.common.sequence

import kt.hal.embedded
import kt.hal.interfaces
import kt.hal.link
import kt.hal.links
import kt.hal.representation


ERRORS_REL = 'errors'


@zope.interface.implementer(kt.hal.interfaces.IError)
class Error(kt.hal.representation.HalRepresentation):
    """Representation of a single error."""

    def __init__(self,
                 message: str,
                 logref: typing.Optional[str] = None,
                 path: typing.Optional[str] = None,
                 status: typing.Optional[int] = None,
                 about: typing.Optional[str] = None,
                 help: typing.Optional[str] = None,
                 describes: typing.Optional[str] = None,
                 attributes: typing.Optional[dict] = None):
        """Initialize error structure.

        :param message: Human-oriented description of the problem.
        :param logref: Identifier of specific instance of problem.
        :param path:
            JSON Pointer referring to the part of a request document
            which caused the error.
        :param status:
            HTTP response status code.  Used for the response, but not
            part of the document.
        :param about:
            Link to human-oriented description of the specific problem.
        :param help:
            Link to documentation that may help resolving the problem.
        :param describes:
            Link to the representation the error describes, if the
            error document replaces it.
        :param attributes:
            Mapping providing non-standard fields of additional data.

        """
        lnks = []
        for rel, href in (('about', about), ('help', help),
                          ('describes', describes)):
            if href is not None:
                lnks.append(kt.hal.link.Link(rel, href))
        attrs = dict(message=message)
        if logref is not None:
            attrs['logref'] = logref
        if path is not None:
            attrs['path'] = path
        attrs.update(attributes or {})
        super(Error, self).__init__(links=kt.hal.links.Links(lnks),
                                    attributes=attrs)
        self.message = message
        self.logref = logref
        self.path = path
        self.status = status


@zope.interface.implementer(kt.hal.interfaces.IErrors,
                            zope.interface.common.sequence.IFiniteSequence)
class Errors(kt.hal.representation.HalRepresentation):
    """Representation of a sequence of errors.

    The errors are embedded using the ``errors`` relation type.

    """

    def __init__(self, errors):
        """Initialize from an iterable providing objects adaptable to
        :class:`~kt.hal.interfaces.IError`.

        The iterable must provide at least one error object.

        """
        errors = tuple(kt.hal.interfaces.IError(error) for error in errors)
        if not errors:
            raise ValueError('sequence of errors cannot be empty')
        super(Errors, self).__init__(
            embedded=kt.hal.embedded.embedded(ERRORS_REL, errors),
            attributes=dict(total=len(errors)),
        )
        self._errors = errors

    def __getitem__(self, index: int):
        """Retrieve specific error from the sequence."""
        return self._errors[index]

    def __iter__(self):
        yield from self._errors

    def __len__(self) -> int:
        """Return the number of errors."""
        return len(self._errors)


@zope.component.adapter(kt.hal.interfaces.IInvalidDocumentStructure)
@zope.interface.implementer(kt.hal.interfaces.IError)
def invalidDocumentError(exc):
    """Adapt invalid document structure exception to an
    :class:`~kt.hal.interfaces.IError`.

    :param exc: Exception object to adapt.

    """
    return Error(
        message=str(exc),
        status=400,
        attributes=dict(structure_type=exc.kind),
    )


@zope.component.adapter(kt.hal.interfaces.IInvalidCuriTemplate)
@zope.interface.implementer(kt.hal.interfaces.IError)
def invalidCuriTemplateError(exc):
    """Adapt invalid CURIE template exception to an
    :class:`~kt.hal.interfaces.IError`.

    :param exc: Exception object to adapt.

    """
    return Error(
        message=exc.__doc__.strip(),
        status=500,
        attributes=dict(invalid_value=exc.value),
    )


@zope.component.adapter(werkzeug.exceptions.HTTPException)
@zope.interface.implementer(kt.hal.interfaces.IError)
def httpExceptionError(exc):
    """Adapt werkzeug HTTP exception to an
    :class:`~kt.hal.interfaces.IError`.

    :param exc: Exception object to adapt.

    """
    return Error(
        message=exc.description,
        status=exc.code,
    )


ADAPTERS = (invalidDocumentError, invalidCuriTemplateError,
            httpExceptionError)


def provide_adapters(registry=None):
    """Register the error adapters.

    If *registry* is not given, the global site manager is used.

    """
    if registry is None:
        registry = zope.component.getGlobalSiteManager()
    for factory in ADAPTERS:
        registry.registerAdapter(factory)
