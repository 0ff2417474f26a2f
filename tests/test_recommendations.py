import json

import pytest
import requests

from careerzoom.services import openai_wrap
from careerzoom.services.openai_wrap import (
    AnalysisClient, AnalysisError, RecommendationClient, RecommendationError, humanize_area, parse_json_block,
)


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=''):
        self.status_code = status_code
        self._payload = payload
        self.text = text or (json.dumps(payload) if payload is not None else '')
        self.headers = {}

    def json(self):
        if self._payload is None:
            raise ValueError('no json')
        return self._payload


@pytest.fixture
def no_sleep(monkeypatch):
    monkeypatch.setattr(openai_wrap.time, 'sleep', lambda s: None)


def _responses(monkeypatch, *responses):
    calls = []
    queue = list(responses)

    def fake_post(url, headers=None, json=None, timeout=None):
        calls.append({'url': url, 'body': json, 'timeout': timeout})
        item = queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item
    monkeypatch.setattr(openai_wrap.requests, 'post', fake_post)
    return calls


def test_mock_table_matches_weak_areas(app):
    client = RecommendationClient(api_key=None)
    assert client.use_mock
    recs = client(['content_clarity', 'technical_problemSolving', 'delivery_pacing'])
    assert [r['area'] for r in recs] == ['content', 'technical']
    assert client(['delivery_pacing']) == []
    assert client([]) == []


def test_mock_flag_overrides_key(app, monkeypatch):
    calls = _responses(monkeypatch)
    client = RecommendationClient(api_key='sk-test', use_mock=True)
    assert [r['area'] for r in client(['delivery_confidence'])] == ['delivery']
    assert calls == []


def test_live_recommendations_are_normalised(app, monkeypatch):
    recs = [{'area': 'content', 'description': 'Tighten answers',
             'resources': [{'title': 'STAR', 'url': 'https://example.com/star', 'type': 'Video'}]}]
    calls = _responses(monkeypatch, FakeResponse(payload={'output_text': json.dumps(recs)}))
    client = RecommendationClient(api_key='sk-test', model='gpt-test', timeout=5)

    out = client(['content_clarity'])
    assert out == [{'area': 'content', 'description': 'Tighten answers',
                    'resources': [{'title': 'STAR', 'url': 'https://example.com/star', 'type': 'video'}]}]
    assert calls[0]['url'] == openai_wrap.RESPONSES_URL
    assert calls[0]['timeout'] == 5
    assert calls[0]['body']['model'] == 'gpt-test'
    assert 'Content Clarity' in calls[0]['body']['input']


def test_wrapped_recommendations_object_is_accepted(app, monkeypatch):
    text = 'Here you go:\n{"recommendations": [{"area": "technical", "description": "Practice"}]}'
    _responses(monkeypatch, FakeResponse(payload={'output': [{'content': [{'text': text}]}]}))
    out = RecommendationClient(api_key='sk-test')(['technical_accuracy'])
    assert out == [{'area': 'technical', 'description': 'Practice', 'resources': []}]


@pytest.mark.parametrize('text', ['not json at all', '[{"area": "content"}]', '{"recommendations": "nope"}'])
def test_malformed_output_raises(app, monkeypatch, text):
    _responses(monkeypatch, FakeResponse(payload={'output_text': text}))
    with pytest.raises(RecommendationError):
        RecommendationClient(api_key='sk-test')(['content_clarity'])


def test_client_error_is_not_retried(app, monkeypatch, no_sleep):
    calls = _responses(monkeypatch, FakeResponse(400, text='bad request'))
    with pytest.raises(RecommendationError):
        RecommendationClient(api_key='sk-test', max_attempts=3)(['content_clarity'])
    assert len(calls) == 1


def test_server_errors_are_retried(app, monkeypatch, no_sleep):
    ok = FakeResponse(payload={'output_text': '[]'})
    calls = _responses(monkeypatch, FakeResponse(503, text='busy'),
                       requests.exceptions.ConnectionError('reset'), ok)
    assert RecommendationClient(api_key='sk-test', max_attempts=3)(['content_clarity']) == []
    assert len(calls) == 3


def test_retries_exhausted(app, monkeypatch, no_sleep):
    _responses(monkeypatch, FakeResponse(500), FakeResponse(502))
    with pytest.raises(RecommendationError):
        RecommendationClient(api_key='sk-test', max_attempts=2)(['content_clarity'])


def test_quota_exhausted_fails_fast(app, monkeypatch, no_sleep):
    calls = _responses(monkeypatch, FakeResponse(429, text='{"error": {"code": "insufficient_quota"}}'))
    with pytest.raises(RecommendationError):
        RecommendationClient(api_key='sk-test', max_attempts=3)(['content_clarity'])
    assert len(calls) == 1


def test_analysis_client(app, monkeypatch):
    with pytest.raises(AnalysisError):
        AnalysisClient()({'transcript': ''})

    mocked = AnalysisClient()({'transcript': 'hello'})
    assert mocked == openai_wrap.MOCK_ANALYSIS
    mocked['keyInsights'].append('mutated')
    assert 'mutated' not in openai_wrap.MOCK_ANALYSIS['keyInsights']

    _responses(monkeypatch, FakeResponse(payload={'output_text': '["not", "an", "object"]'}))
    with pytest.raises(AnalysisError):
        AnalysisClient(api_key='sk-test')({'transcript': 'hello'})


def test_helpers():
    assert humanize_area('delivery_bodyLanguage') == 'Delivery BodyLanguage'
    assert parse_json_block('```json\n[1, 2]\n```') == [1, 2]
    with pytest.raises(ValueError):
        parse_json_block('')
