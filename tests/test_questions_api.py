from careerzoom.models import Question
from careerzoom.services.questions import GENERAL_QUESTIONS, SEED_JOB_TITLES, seed_question_bank


def _create_interview(client, headers, **body):
    payload = {'title': 'Practice', 'industry': 'Data Science', 'jobTitle': 'Data Analyst'}
    payload.update(body)
    return client.post('/api/interviews', json=payload, headers=headers)


def test_seed_bank_once(app):
    assert seed_question_bank() == 600
    assert seed_question_bank() == 0
    assert seed_question_bank(replace=True) == 600
    assert Question.query.count() == 600


def test_industries_and_industry_questions(client, make_user, auth):
    seed_question_bank()
    h = auth(make_user())

    assert client.get('/api/questions/industries').status_code == 401
    assert client.get('/api/questions/industries', headers=h).get_json() == sorted(SEED_JOB_TITLES)

    resp = client.get('/api/questions/industry/Finance?jobTitle=Accountant&type=technical', headers=h)
    items = resp.get_json()
    assert len(items) == 5
    assert {q['type'] for q in items} == {'technical'}
    assert {q['jobTitle'] for q in items} == {'Accountant'}
    assert items[0]['text'] == 'Explain the concept of time value of money.'
    assert 'money' in items[0]['keywords']

    resp = client.get('/api/questions/industry/Finance?jobTitle=Accountant&type=technical&difficulty=advanced',
                      headers=h)
    assert len(resp.get_json()) == 2
    assert client.get('/api/questions/industry/Astronomy', headers=h).get_json() == []


def test_interview_gets_matching_bank_questions(client, make_user, auth):
    seed_question_bank()
    h = auth(make_user())

    resp = _create_interview(client, h, difficulty='advanced')
    assert resp.status_code == 201
    questions = resp.get_json()['questions']
    assert len(questions) == 5
    assert {q['difficulty'] for q in questions} == {'advanced'}
    assert {q['type'] for q in questions} == {'behavioral', 'technical'}


def test_interview_falls_back_to_general_questions(client, make_user, auth):
    h = auth(make_user())

    first = _create_interview(client, h, industry='Astronomy', jobTitle='Stargazer').get_json()
    second = _create_interview(client, h, industry='Astronomy', jobTitle='Stargazer').get_json()
    assert [q['text'] for q in first['questions']] == [text for text, _ in GENERAL_QUESTIONS]
    assert [q['id'] for q in second['questions']] == [q['id'] for q in first['questions']]
    # the fallback set is not part of the public bank
    assert client.get('/api/questions/industries', headers=h).get_json() == []
