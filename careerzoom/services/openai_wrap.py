"""Thin wrappers around the OpenAI Responses HTTP API.

Calls go straight to the HTTP endpoint with `requests`, the same way for every
vendor call in this package. Both clients are built once by the app factory
from the app config; when no API key is configured, or mock mode is switched
on, they return deterministic mock data instead of calling out.
"""

import json
import random
import re
import time
from typing import Any, Dict, List, Optional

import requests
from flask import current_app

RESPONSES_URL = 'https://api.openai.com/v1/responses'


class VendorError(Exception):
    """The AI vendor failed or returned something unusable."""


class RecommendationError(VendorError):
    pass


class AnalysisError(VendorError):
    pass


# deterministic table used when no API key is configured
MOCK_RECOMMENDATIONS = [
    (('content_clarity', 'content_structure'), {
        'area': 'content',
        'description': 'Improve answer structure and clarity',
        'resources': [
            {'title': 'The STAR Method for Behavioral Interviews', 'url': 'https://example.com/star-method', 'type': 'article'},
            {'title': 'Structured Communication Techniques', 'url': 'https://example.com/structured-communication', 'type': 'video'},
        ],
    }),
    (('delivery_confidence', 'delivery_bodyLanguage'), {
        'area': 'delivery',
        'description': 'Enhance confidence and body language',
        'resources': [
            {'title': 'Body Language Mastery for Interviews', 'url': 'https://example.com/body-language', 'type': 'course'},
            {'title': 'Confidence Building Exercises', 'url': 'https://example.com/confidence', 'type': 'practice'},
        ],
    }),
    (('technical_accuracy', 'technical_problemSolving'), {
        'area': 'technical',
        'description': 'Strengthen technical knowledge and problem-solving',
        'resources': [
            {'title': 'Technical Interview Problem Solving', 'url': 'https://example.com/technical-problems', 'type': 'course'},
            {'title': 'Industry-Specific Knowledge Guide', 'url': 'https://example.com/industry-knowledge', 'type': 'book'},
        ],
    }),
]

MOCK_ANALYSIS = {
    'overallScore': 4.2,
    'contentAnalysis': {
        'relevance': {'score': 4.5, 'feedback': 'Answers were highly relevant to the questions asked.'},
        'completeness': {'score': 4.0, 'feedback': 'Most answers were complete, but some technical details could be expanded upon.'},
        'accuracy': {'score': 4.3, 'feedback': 'Technical information provided was accurate and well-explained.'},
        'structure': {'score': 3.9, 'feedback': 'Answers had a good structure but could benefit from clearer organization in some cases.'},
    },
    'deliveryAnalysis': {
        'confidence': {'score': 4.1, 'feedback': 'Demonstrated good confidence throughout most of the interview.'},
        'clarity': {'score': 4.4, 'feedback': 'Speech was clear and well-articulated.'},
        'pacing': {'score': 3.8, 'feedback': 'Pacing was generally good but occasionally too rapid when discussing complex topics.'},
        'engagement': {'score': 4.2, 'feedback': 'Maintained good engagement and enthusiasm throughout the interview.'},
        'bodyLanguage': {'score': 3.7, 'feedback': 'Generally positive body language, but could improve eye contact and reduce nervous gestures.'},
    },
    'questionAnalysis': [],
    'keyInsights': [
        'Strong technical knowledge demonstrated throughout',
        'Excellent communication skills and articulation',
        'Could improve specific examples for behavioral questions',
    ],
    'improvementAreas': [
        'Body language - reduce fidgeting and improve eye contact',
        'Provide more quantifiable results in achievement examples',
    ],
}


def humanize_area(tag: str) -> str:
    """'content_clarity' -> 'Content Clarity'"""
    return ' '.join(w[:1].upper() + w[1:] for w in tag.split('_'))


def extract_output_text(jr) -> str:
    """Pull the generated text out of a Responses API payload."""
    if not isinstance(jr, dict):
        return ''
    text = jr.get('output_text') or ''
    if text:
        return text
    out = jr.get('output') or jr.get('results') or []
    parts = []
    for item in out:
        if isinstance(item, dict):
            for c in item.get('content', []):
                if isinstance(c, dict) and 'text' in c:
                    parts.append(c['text'])
                elif isinstance(c, str):
                    parts.append(c)
        elif isinstance(item, str):
            parts.append(item)
    return '\n'.join(parts)


def parse_json_block(text: str):
    """Parse the first JSON array or object found in model output."""
    text = (text or '').strip()
    if not text:
        raise ValueError('empty model output')
    try:
        return json.loads(text)
    except ValueError:
        pass
    m = re.search(r"(\[[\s\S]*\]|\{[\s\S]*\})", text)
    if not m:
        raise ValueError('no JSON found in model output')
    return json.loads(m.group(0))


def post_responses(api_key: str, model: str, prompt: str, max_output_tokens: int = 800,
                   timeout: float = 30, max_attempts: int = 3, error_cls=VendorError) -> str:
    """POST a prompt to the Responses API and return the output text.

    429 and 5xx responses and network errors are retried with exponential
    backoff (honouring Retry-After); anything else, or running out of
    attempts, raises ``error_cls``.
    """
    headers = {'Authorization': f'Bearer {api_key}', 'Content-Type': 'application/json'}
    body = {
        'model': model,
        'input': prompt,
        'max_output_tokens': max_output_tokens,
        'temperature': 0.2,
    }
    backoff = 1.0
    last_error = None
    for attempt in range(1, max_attempts + 1):
        try:
            r = requests.post(RESPONSES_URL, headers=headers, json=body, timeout=timeout)
        except requests.exceptions.RequestException as e:
            last_error = e
            current_app.logger.warning('OpenAI network error, attempt %s/%s', attempt, max_attempts)
        else:
            if r.status_code == 429 and 'insufficient_quota' in (r.text or ''):
                raise error_cls('OpenAI quota exhausted')
            if r.status_code == 429 or 500 <= r.status_code < 600:
                last_error = error_cls(f'OpenAI returned {r.status_code}')
                ra = r.headers.get('Retry-After')
                try:
                    backoff = float(ra) if ra else backoff
                except ValueError:
                    pass
                current_app.logger.warning('OpenAI request returned %s, attempt %s/%s; body=%s',
                                           r.status_code, attempt, max_attempts, (r.text or '')[:500])
            elif r.status_code >= 400:
                raise error_cls(f'OpenAI HTTP error {r.status_code}: {(r.text or "")[:500]}')
            else:
                try:
                    return extract_output_text(r.json())
                except ValueError as e:
                    raise error_cls('OpenAI returned a non-JSON body') from e
        if attempt < max_attempts:
            time.sleep(backoff + random.uniform(0, 0.5))
            backoff *= 2
    raise error_cls(f'OpenAI request failed after {max_attempts} attempts: {last_error}')


def _normalize_recommendations(data) -> List[Dict[str, Any]]:
    if isinstance(data, dict):
        data = data.get('recommendations', data.get('items'))
    if not isinstance(data, list):
        raise RecommendationError('recommendations payload is not a list')
    out = []
    for item in data:
        if not isinstance(item, dict) or not item.get('area') or not item.get('description'):
            raise RecommendationError(f'malformed recommendation: {item!r}')
        resources = []
        for res in item.get('resources') or []:
            if not isinstance(res, dict) or not res.get('title'):
                raise RecommendationError(f'malformed resource: {res!r}')
            resources.append({
                'title': str(res['title']),
                'url': res.get('url') or '',
                'type': str(res.get('type') or 'article').lower(),
            })
        out.append({'area': str(item['area']), 'description': str(item['description']), 'resources': resources})
    return out


class RecommendationClient:
    """Turns weak-area tags into recommendation dicts."""

    def __init__(self, api_key: Optional[str] = None, model: str = 'gpt-4o-mini',
                 use_mock: bool = False, timeout: float = 30, max_attempts: int = 3):
        self.api_key = api_key
        self.model = model
        self.use_mock = use_mock or not api_key
        self.timeout = timeout
        self.max_attempts = max_attempts

    def mock(self, weak_areas):
        tags = set(weak_areas)
        return [dict(rec) for keys, rec in MOCK_RECOMMENDATIONS if tags.intersection(keys)]

    def __call__(self, weak_areas: List[str]) -> List[Dict[str, Any]]:
        if not weak_areas:
            return []
        if self.use_mock:
            current_app.logger.info('Using mock recommendations for %s', weak_areas)
            return self.mock(weak_areas)

        areas = ', '.join(humanize_area(a) for a in weak_areas)
        prompt = "\n".join([
            "You are an expert career coach providing targeted recommendations for interview improvement.",
            f"The user has demonstrated weaknesses in the following areas: {areas}.",
            "Return ONLY a JSON array of objects shaped like:",
            '[{"area": "content|delivery|technical", "description": "what to improve",',
            '  "resources": [{"title": "...", "url": "https://...", "type": "article|video|course|book|practice"}]}]',
        ])
        text = post_responses(self.api_key, self.model, prompt, timeout=self.timeout,
                              max_attempts=self.max_attempts, error_cls=RecommendationError)
        try:
            data = parse_json_block(text)
        except ValueError as e:
            raise RecommendationError(f'unparsable recommendations: {e}') from e
        return _normalize_recommendations(data)


class AnalysisClient:
    """Scores an interview transcript into content/delivery categories."""

    def __init__(self, api_key: Optional[str] = None, model: str = 'gpt-4o-mini',
                 use_mock: bool = False, timeout: float = 60, max_attempts: int = 3):
        self.api_key = api_key
        self.model = model
        self.use_mock = use_mock or not api_key
        self.timeout = timeout
        self.max_attempts = max_attempts

    def __call__(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """payload expects keys: transcript, questions (list), industry, job_title"""
        transcript = payload.get('transcript') or ''
        if not transcript:
            raise AnalysisError('no transcript provided for analysis')
        if self.use_mock:
            return json.loads(json.dumps(MOCK_ANALYSIS))

        questions = '\n'.join(q for q in payload.get('questions') or [] if q)
        prompt = "\n".join([
            f"You are an expert interview coach analyzing a job interview for a {payload.get('job_title')} "
            f"position in the {payload.get('industry')} industry.",
            "Return ONLY a JSON object with keys: overallScore (1-5), contentAnalysis and deliveryAnalysis "
            "(each mapping a facet name to {score: 1-5, feedback: str}), questionAnalysis (list), "
            "keyInsights (list of str), improvementAreas (list of str).",
            "--",
            "Questions:",
            questions or "(not provided)",
            "--",
            "Transcript:",
            transcript,
        ])
        text = post_responses(self.api_key, self.model, prompt, max_output_tokens=1500,
                              timeout=self.timeout, max_attempts=self.max_attempts, error_cls=AnalysisError)
        try:
            data = parse_json_block(text)
        except ValueError as e:
            raise AnalysisError(f'unparsable analysis: {e}') from e
        if not isinstance(data, dict):
            raise AnalysisError('analysis payload is not an object')
        return data
