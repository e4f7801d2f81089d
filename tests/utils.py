"""\
Tests support for kt.hal tests.

"""

import unittest

import flask
import zope.component

import kt.hal.error


class HALTestCase(unittest.TestCase):

    def setUp(self):
        super(HALTestCase, self).setUp()
        self.app = flask.Flask(__name__)
        self.app.config['PROPAGATE_EXCEPTIONS'] = True
        self.app.config['TESTING'] = True
        self.client = self.app.test_client()

    def request_context(self, *args, **kwargs):
        return self.app.test_request_context(*args, **kwargs)

    def http_get(self, path, status=200):
        response = self.client.get(path)
        if status:
            self.assertEqual(
                response.status_code, status,
                f'GET {path} status {response.status_code}, expected {status}')
        return response

    def http_post(self, path, status=201, **kwargs):
        response = self.client.post(path, **kwargs)
        if status:
            self.assertEqual(
                response.status_code, status,
                f'POST {path} status {response.status_code}, expected {status}'
            )
        return response


class AdaptersHelper:
    """Register the error adapters for the duration of a test."""

    def setUp(self):
        super(AdaptersHelper, self).setUp()
        self._gsm = zope.component.getGlobalSiteManager()
        kt.hal.error.provide_adapters(self._gsm)

    def tearDown(self):
        for factory in kt.hal.error.ADAPTERS:
            self._gsm.unregisterAdapter(factory)
        super(AdaptersHelper, self).tearDown()
