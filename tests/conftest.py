import os
import sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest
from flask import g

from careerzoom import create_app
from careerzoom.extensions import db
from careerzoom.models import User, Interview, Feedback
from careerzoom.utils.tokens import generate_token


@pytest.fixture
def app():
    app = create_app('config.TestConfig')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    # the app context outlives each request, so Flask-Login's per-context
    # user cache has to be cleared or the first token wins for the whole test
    @app.before_request
    def _forget_cached_user():
        g.pop('_login_user', None)

    return app.test_client()


@pytest.fixture
def make_user(app):
    def _make(email='owner@example.com', password='password123'):
        u = User(email=email, first_name='Test', last_name='User')
        u.set_password(password)
        db.session.add(u)
        db.session.commit()
        return u
    return _make


@pytest.fixture
def auth(app):
    def _headers(user):
        return {'Authorization': f'Bearer {generate_token(user.id)}'}
    return _headers


@pytest.fixture
def make_interview(app):
    def _make(owner, **kw):
        i = Interview(user_id=owner.id, title=kw.pop('title', 'Backend mock'),
                      industry=kw.pop('industry', 'Software'), job_title=kw.pop('job_title', 'Engineer'),
                      status=kw.pop('status', 'scheduled'), **kw)
        db.session.add(i)
        db.session.commit()
        return i
    return _make


def scored(**scores):
    """scored(clarity=2) -> {'clarity': {'score': 2, 'comments': ''}}"""
    return {k: {'score': v, 'comments': ''} for k, v in scores.items()}


def build_feedback(kind='peer', content=None, delivery=None, technical=None, interview_id=1, user_id=1):
    return Feedback(interview_id=interview_id, user_id=user_id, kind=kind,
                    content_feedback=content, delivery_feedback=delivery, technical_feedback=technical)
