"""\
Top-level API to construct HAL responses from application objects and
representations from HAL requests, for Flask applications.

Settings used from ``flask.current_app.config``:

``KT_HAL_REL_REGISTRY``
    :class:`~kt.hal.curies.RelRegistry` used to resolve link-relation
    types of request documents, in addition to CURIEs declared by the
    documents themselves.

``KT_HAL_REPRESENTATION_FACTORY``
    Factory used by :func:`request_representation` when none is passed
    explicitly.

"""

import json
import logging

import flask
import werkzeug.datastructures

import kt.hal.error
import kt.hal.interfaces
import kt.hal.serializers


CONTENT_TYPE = 'application/hal+json'
"""Media type associated with HAL payloads."""

ERROR_CONTENT_TYPE = 'application/vnd.error+json'
"""Media type associated with error payloads."""

logger = logging.getLogger(__name__)


def _response(body, headers=None, status=200, content_type=CONTENT_TYPE):
    data = json.dumps(body).encode('utf-8')
    hdrs = werkzeug.datastructures.Headers()
    if headers is not None:
        hdrs.extend(headers)
    if 'Content-Type' not in hdrs:
        hdrs['Content-Type'] = content_type
    return flask.make_response(data, status, hdrs)


def response(resource, headers=None, status=200):
    """Generate response containing *resource* as HAL document.

    *resource* must be adaptable to
    :class:`~kt.hal.interfaces.IHalRepresentation`.

    If *headers* is given and non-``None``, it must be be mapping of
    additional headers that should be returned in the request.  If a
    **Content-Type** header is provided, it will be used instead of
    the default value for HAL responses.

    """
    body = kt.hal.serializers.representation(resource)
    return _response(body, headers=headers, status=status)


def request_representation(factory=None, embedded_types=None):
    """Create a representation from the JSON body of the current request.

    See :func:`kt.hal.serializers.parse` for *factory* and
    *embedded_types*.  Raises
    :exc:`~kt.hal.interfaces.InvalidDocumentStructure` if the body is
    not a HAL document.

    """
    config = flask.current_app.config
    if factory is None:
        factory = config.get('KT_HAL_REPRESENTATION_FACTORY')
    document = flask.request.get_json()
    representation = kt.hal.serializers.parse(
        document,
        factory=factory,
        embedded_types=embedded_types,
        rel_registry=config.get('KT_HAL_REL_REGISTRY'),
    )
    logger.debug('parsed HAL document from %s %s',
                 flask.request.method, flask.request.path)
    return representation


def error(error, headers=None):
    """Generate error response from exception.

    The exception must be adaptable to
    :class:`~kt.hal.interfaces.IErrors` or
    :class:`~kt.hal.interfaces.IError`.  A single error is rendered as
    a ``vnd.error`` document; multiple errors are embedded as
    ``errors`` in the document.

    If *headers* is given and non-``None``, it must be be mapping of
    additional headers that should be returned in the request.  If a
    **Content-Type** header is provided, it will be used instead of
    the default value for error responses.

    """
    seq = kt.hal.interfaces.IErrors(error, None)
    if seq is None:
        seq = (kt.hal.interfaces.IError(error),)
    else:
        seq = tuple(kt.hal.interfaces.IError(err) for err in seq)
    statuses = set(err.status for err in seq if err.status)
    if len(statuses) == 1:
        # All the same, just use it:
        status = statuses.pop()
    elif not statuses:
        # Nothing specified, so the situation is bad:
        status = 500
    else:
        statuses = sorted(statuses)
        if statuses[-1] >= 500:
            status = 500
        else:
            status = 400
    if len(seq) == 1:
        body = kt.hal.serializers.representation(seq[0])
    else:
        body = kt.hal.serializers.representation(kt.hal.error.Errors(seq))
    logger.info('rendering %d error(s) with status %s', len(seq), status)
    return _response(body, headers=headers, status=status,
                     content_type=ERROR_CONTENT_TYPE)
