import logging

from django.test import SimpleTestCase

from core.middleware import RequestIDFilter, _request_id_ctx


class RequestIDFilterTests(SimpleTestCase):
    def _record(self, **extra):
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "msg", (), None)
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_explicit_request_id_is_kept(self):
        record = self._record(request_id="explicit")
        RequestIDFilter().filter(record)
        self.assertEqual(record.request_id, "explicit")

    def test_falls_back_to_context(self):
        token = _request_id_ctx.set("from-context")
        try:
            record = self._record()
            RequestIDFilter().filter(record)
        finally:
            _request_id_ctx.reset(token)
        self.assertEqual(record.request_id, "from-context")

    def test_missing_request_id_is_none(self):
        record = self._record()
        RequestIDFilter().filter(record)
        self.assertIsNone(record.request_id)
