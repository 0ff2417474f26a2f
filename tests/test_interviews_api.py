from careerzoom.extensions import db
from careerzoom.models import Feedback, ImprovementPlan, Interview

LONG_TRANSCRIPT = "Interviewer: Tell me about yourself. Candidate: " + "I build backend services in Python. " * 10


def test_create_and_list_interviews(client, make_user, auth):
    owner = make_user()
    h = auth(owner)
    resp = client.post('/api/interviews', json={
        'title': 'Backend mock', 'industry': 'Software', 'jobTitle': 'Engineer',
        'difficulty': 'advanced', 'interviewDate': '2026-11-02T10:30', 'duration': 45,
    }, headers=h)
    assert resp.status_code == 201
    body = resp.get_json()
    assert body['status'] == 'scheduled'
    assert body['difficulty'] == 'advanced'
    assert body['interviewDate'].startswith('2026-11-02T10:30')

    listed = client.get('/api/interviews', headers=h).get_json()
    assert [i['id'] for i in listed] == [body['id']]


def test_create_interview_validation(client, make_user, auth):
    owner = make_user()
    resp = client.post('/api/interviews', json={'title': 'x', 'difficulty': 'expert', 'duration': 1},
                       headers=auth(owner))
    assert resp.status_code == 400
    errors = resp.get_json()['errors']
    assert {'industry', 'jobTitle', 'difficulty', 'duration'} <= set(errors)


def test_status_transitions(client, make_user, make_interview, auth):
    owner = make_user()
    h = auth(owner)
    iv = make_interview(owner)

    assert client.post(f'/api/interviews/{iv.id}/start', headers=h).get_json()['status'] == 'in-progress'
    assert client.post(f'/api/interviews/{iv.id}/start', headers=h).status_code == 409
    resp = client.post(f'/api/interviews/{iv.id}/end', json={'transcript': 'short'}, headers=h)
    assert resp.status_code == 200
    assert resp.get_json()['status'] == 'completed'
    assert client.post(f'/api/interviews/{iv.id}/end', headers=h).status_code == 409
    # too short to analyse
    assert Feedback.query.filter_by(interview_id=iv.id).count() == 0


def test_end_with_transcript_runs_analysis(client, make_user, make_interview, auth):
    owner = make_user()
    h = auth(owner)
    iv = make_interview(owner, status='in-progress')

    resp = client.post(f'/api/interviews/{iv.id}/end', json={'transcript': LONG_TRANSCRIPT}, headers=h)
    assert resp.status_code == 200
    body = resp.get_json()
    assert body['hasTranscript'] is True
    assert body['analysisResults']['overallScore'] == 4.2

    ai = Feedback.query.filter_by(interview_id=iv.id, kind='ai').all()
    assert len(ai) == 1
    assert ai[0].delivery_feedback['pacing']['score'] == 3.8
    plan = ImprovementPlan.query.filter_by(user_id=owner.id).one()
    assert 'content_relevance' in plan.consistent_strength_areas

    # explicit re-analysis does not duplicate the ai feedback
    assert client.post(f'/api/interviews/{iv.id}/analyze', headers=h).status_code == 202
    assert Feedback.query.filter_by(interview_id=iv.id, kind='ai').count() == 1


def test_analyze_requires_transcript(client, make_user, make_interview, auth):
    owner = make_user()
    iv = make_interview(owner)
    assert client.post(f'/api/interviews/{iv.id}/analyze', headers=auth(owner)).status_code == 400


def test_peer_invite_and_invitations(client, make_user, make_interview, auth):
    owner = make_user()
    peer = make_user('peer@example.com')
    iv = make_interview(owner)
    h = auth(owner)

    resp = client.post(f'/api/interviews/{iv.id}/peer-invite', json={'email': 'peer@example.com'}, headers=h)
    assert resp.status_code == 200
    assert resp.get_json()['peerReviewers'] == [peer.id]
    again = client.post(f'/api/interviews/{iv.id}/peer-invite', json={'email': 'peer@example.com'}, headers=h)
    assert again.status_code == 400
    missing = client.post(f'/api/interviews/{iv.id}/peer-invite', json={'email': 'nobody@example.com'}, headers=h)
    assert missing.status_code == 404

    invitations = client.get('/api/interviews/invitations', headers=auth(peer)).get_json()
    assert [i['id'] for i in invitations] == [iv.id]
    # peers can read the interview but not manage it
    assert client.get(f'/api/interviews/{iv.id}', headers=auth(peer)).status_code == 200
    assert client.post(f'/api/interviews/{iv.id}/start', headers=auth(peer)).status_code == 403


def test_delete_interview_removes_feedback(client, make_user, make_interview, auth):
    owner = make_user()
    iv = make_interview(owner)
    h = auth(owner)
    client.post(f'/api/interviews/{iv.id}/feedback', json={'type': 'self'}, headers=h)

    assert client.delete(f'/api/interviews/{iv.id}', headers=h).status_code == 200
    assert db.session.get(Interview, iv.id) is None
    assert Feedback.query.count() == 0
