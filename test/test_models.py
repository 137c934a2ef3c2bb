#!/usr/bin/env python3
import json
import unittest

from aqua_events.models import AuditRecord, PolicyData, RenderedMessage, ResultCode, parse_policy_data


class TestAuditRecord(unittest.TestCase):
    def test_from_dict_ignores_unknown_keys_and_nulls(self):
        record = AuditRecord.from_dict({
            'result': 3,
            'category': 'file',
            'host': None,
            'not_a_field': 'x',
        })
        self.assertEqual(record.result, 3)
        self.assertEqual(record.category, 'file')
        self.assertEqual(record.host, '')

    def test_from_dict_coerces_numeric_strings(self):
        record = AuditRecord.from_dict({'result': '2', 'time': '1700000000', 'critical': 'abc'})
        self.assertEqual(record.result, 2)
        self.assertEqual(record.time, 1700000000)
        self.assertEqual(record.critical, 0)

    def test_from_dict_non_finite_numbers_become_zero(self):
        record = AuditRecord.from_dict({'result': 3, 'critical': float('inf'), 'high': 1e400,
                                        'low': '1e400', 'medium': float('nan')})
        self.assertEqual(record.result, 3)
        self.assertEqual(record.critical, 0)
        self.assertEqual(record.high, 0)
        self.assertEqual(record.low, 0)
        self.assertEqual(record.medium, 0)

    def test_wire_key_for_resource_type(self):
        record = AuditRecord.from_dict({'resoure_type': 'deployment'})
        self.assertEqual(record.resource_type, 'deployment')
        self.assertEqual(record.to_dict(), {'resoure_type': 'deployment'})

    def test_to_dict_omits_empty_values(self):
        record = AuditRecord(result=1, image='nginx:latest', critical=0, application_scopes=[])
        self.assertEqual(record.to_dict(), {'image': 'nginx:latest', 'result': 1})

    def test_to_json_is_compact_and_ordered(self):
        record = AuditRecord(result=3, category='unknown-category', action='exec')
        self.assertEqual(record.to_json(), '{"action":"exec","category":"unknown-category","result":3}')

    def test_result_code(self):
        self.assertEqual(AuditRecord(result=4).result_code, ResultCode.ALERT)
        self.assertIsNone(AuditRecord(result=9).result_code)
        self.assertIsNone(AuditRecord().result_code)

    def test_severity_total(self):
        record = AuditRecord(critical=1, high=2, medium=3, low=4)
        self.assertEqual(record.severity_total, 10)

    def test_result_keywords(self):
        self.assertEqual(ResultCode.SUCCESS.keyword, 'success')
        self.assertEqual(ResultCode.BLOCK.keyword, 'block')
        self.assertEqual(ResultCode.DETECT.keyword, 'detect')
        self.assertEqual(ResultCode.ALERT.keyword, 'alert')


class TestPolicyData(unittest.TestCase):
    def test_parse_embedded_json_string(self):
        raw = json.dumps({
            'blocking': True,
            'pending': False,
            'policy_id': 7,
            'policy_name': 'Default',
            'registry': 'docker.io',
            'repository': 'library/nginx',
            'controls': ['max_severity', 'malware'],
        })
        data = parse_policy_data(raw)
        self.assertTrue(data.blocking)
        self.assertFalse(data.pending)
        self.assertEqual(data.policy_id, 7)
        self.assertEqual(data.policy_name, 'Default')
        self.assertEqual(data.repository, 'library/nginx')
        self.assertEqual(data.controls, ['max_severity', 'malware'])

    def test_parse_already_decoded_object(self):
        data = parse_policy_data({'policy_name': 'p1', 'controls': ['a']})
        self.assertEqual(data.policy_name, 'p1')
        self.assertEqual(data.controls, ['a'])

    def test_malformed_json_yields_empty_policy(self):
        with self.assertLogs('aqua_events.models', level='WARNING'):
            data = parse_policy_data('{"blocking": true, "controls": [')
        self.assertEqual(data, PolicyData())

    def test_non_object_document_yields_empty_policy(self):
        with self.assertLogs('aqua_events.models', level='WARNING'):
            data = parse_policy_data('["a", "b"]')
        self.assertEqual(data, PolicyData())

    def test_boolean_strings_are_parsed_explicitly(self):
        data = parse_policy_data('{"blocking": "false", "pending": "false"}')
        self.assertFalse(data.blocking)
        self.assertFalse(data.pending)
        data = parse_policy_data({'blocking': 'true', 'pending': 'True'})
        self.assertTrue(data.blocking)
        self.assertTrue(data.pending)

    def test_invalid_boolean_values_become_false(self):
        with self.assertLogs('aqua_events.models', level='WARNING'):
            data = parse_policy_data({'blocking': 'yes', 'pending': 1})
        self.assertFalse(data.blocking)
        self.assertFalse(data.pending)

    def test_empty_data_is_silent(self):
        self.assertEqual(parse_policy_data(''), PolicyData())
        self.assertEqual(parse_policy_data(None), PolicyData())


class TestRenderedMessage(unittest.TestCase):
    def test_payload_wraps_single_attachment(self):
        msg = RenderedMessage(color='good', text='body', caption='cap', ts=123)
        payload = msg.to_payload()
        self.assertEqual(len(payload['attachments']), 1)
        attachment = payload['attachments'][0]
        self.assertEqual(attachment['color'], 'good')
        self.assertEqual(attachment['text'], 'body')
        self.assertEqual(attachment['author_subname'], 'cap')
        self.assertEqual(attachment['author_name'], 'aqua-events')
        self.assertEqual(attachment['fallback'], 'Aqua Security Audit Events')
        self.assertEqual(attachment['ts'], 123)


if __name__ == '__main__':
    unittest.main()
