"""Interview question bank.

Public bank questions are matched to an interview by industry, job title and
difficulty. When nothing matches, the interview gets a small general set that
is kept out of the public listings.
"""

from flask import current_app

from ..extensions import db
from ..models.question import Question

MAX_INTERVIEW_QUESTIONS = 10

GENERAL_INDUSTRY = 'General'
GENERAL_QUESTIONS = (
    ('Tell me about yourself and your experience.', 'beginner'),
    ('What are your strengths and weaknesses?', 'intermediate'),
    ('Why do you want to work for this company?', 'intermediate'),
    ('Tell me about a challenging project you worked on.', 'intermediate'),
    ('Where do you see yourself in 5 years?', 'intermediate'),
)

SEED_JOB_TITLES = {
    'Software Development': ['Frontend Developer', 'Backend Developer', 'Full Stack Developer',
                             'Mobile Developer', 'DevOps Engineer'],
    'Data Science': ['Data Scientist', 'Data Analyst', 'Machine Learning Engineer',
                     'Data Engineer', 'Business Intelligence Analyst'],
    'Product Management': ['Product Manager', 'Product Owner', 'Technical Product Manager',
                           'Associate Product Manager', 'Senior Product Manager'],
    'Marketing': ['Digital Marketing Manager', 'Content Marketer', 'SEO Specialist',
                  'Social Media Manager', 'Marketing Analyst'],
    'Finance': ['Financial Analyst', 'Investment Banker', 'Accountant', 'Financial Advisor', 'Risk Analyst'],
    'Healthcare': ['Registered Nurse', 'Physician Assistant', 'Medical Technologist',
                   'Healthcare Administrator', 'Clinical Research Associate'],
}

BEHAVIORAL = (
    'Tell me about yourself.',
    'What is your greatest professional achievement?',
    'Describe a time when you had to overcome a significant challenge at work.',
    'How do you handle conflict with colleagues?',
    'Tell me about a time you failed and what you learned from it.',
    'How do you prioritize your work when you have multiple deadlines?',
    'Describe a situation where you had to work with a difficult team member.',
    'Tell me about a time you had to adapt to a significant change at work.',
    'How do you handle pressure or stressful situations?',
    'Describe a time when you showed leadership skills.',
)

TECHNICAL = {
    'Software Development': (
        'What is the difference between var, let, and const in JavaScript?',
        'Explain the concept of RESTful APIs and their principles.',
        'How do you handle state management in React?',
        'Describe the difference between SQL and NoSQL databases.',
        'What are the SOLID principles in object-oriented programming?',
    ),
    'Data Science': (
        'Explain the difference between supervised and unsupervised learning.',
        'What is the curse of dimensionality and how would you handle it?',
        'Describe the bias-variance tradeoff in machine learning models.',
        'How would you handle imbalanced data in a classification problem?',
        'Explain the concept of regularization in machine learning.',
    ),
    'Product Management': (
        'How do you prioritize features in a product roadmap?',
        'Explain your approach to conducting user research.',
        'How do you measure the success of a product feature?',
        'Walk me through how you would create a PRD (Product Requirements Document).',
        'How do you collaborate with engineering teams to ensure successful delivery?',
    ),
    'Marketing': (
        'How do you measure the ROI of a marketing campaign?',
        'Explain your approach to creating a content marketing strategy.',
        'How would you optimize a PPC campaign?',
        'What metrics do you use to evaluate social media performance?',
        'How do you approach A/B testing for marketing materials?',
    ),
    'Finance': (
        'Explain the concept of time value of money.',
        'How would you value a company using DCF analysis?',
        'What are the main financial statements and how do they relate to each other?',
        'Explain the difference between NPV and IRR.',
        'How would you evaluate a potential investment opportunity?',
    ),
    'Healthcare': (
        'How do you ensure patient confidentiality and HIPAA compliance?',
        'Describe your approach to handling emergency situations.',
        'How do you stay updated with the latest medical research and developments?',
        'What experience do you have with electronic health records (EHR) systems?',
        'How do you handle situations where a patient is not following treatment recommendations?',
    ),
}

SITUATIONAL = (
    "How would you handle a situation where you're assigned more work than you can handle?",
    'What would you do if you caught a colleague breaking company policy?',
    'How would you handle a situation where your team disagrees with your approach?',
    'What would you do if you realized you made a significant mistake on a project?',
    'How would you handle a situation where you have to meet a tight deadline?',
)


def keywords_for(text):
    words = (w.strip('.,?!()').lower() for w in text.split())
    return [w for w in words if len(w) > 3]


def seed_rows():
    """Yield Question kwargs for the starter bank, difficulty spread by position."""
    for industry, job_titles in SEED_JOB_TITLES.items():
        for job_title in job_titles:
            groups = (
                ('behavioral', BEHAVIORAL, ('beginner', 'intermediate', 'advanced')),
                ('technical', TECHNICAL[industry], ('intermediate', 'advanced')),
                ('situational', SITUATIONAL, ('beginner', 'intermediate')),
            )
            for qtype, texts, levels in groups:
                for i, text in enumerate(texts):
                    yield dict(
                        text=text,
                        industry=industry,
                        job_title=job_title,
                        difficulty=levels[i % len(levels)],
                        type=qtype,
                        sample_answer=f'Sample answer for "{text}" in {industry} - {job_title}',
                        keywords=keywords_for(text),
                        is_public=True,
                    )


def seed_question_bank(replace=False) -> int:
    """Load the starter bank; returns the number of rows inserted."""
    if replace:
        Question.query.filter_by(is_public=True).delete()
    elif Question.query.filter_by(is_public=True).first() is not None:
        current_app.logger.info('Question bank already seeded, skipping')
        return 0
    rows = [Question(**kw) for kw in seed_rows()]
    db.session.add_all(rows)
    db.session.commit()
    current_app.logger.info('Seeded %s bank questions', len(rows))
    return len(rows)


def general_questions():
    """The fallback set, created on first use."""
    existing = (Question.query.filter_by(industry=GENERAL_INDUSTRY, is_public=False)
                .order_by(Question.id).all())
    if existing:
        return existing
    rows = [
        Question(text=text, industry=GENERAL_INDUSTRY, job_title=GENERAL_INDUSTRY, difficulty=difficulty,
                 type='behavioral', keywords=keywords_for(text), is_public=False)
        for text, difficulty in GENERAL_QUESTIONS
    ]
    db.session.add_all(rows)
    db.session.flush()
    return rows


def select_questions(industry, job_title, difficulty):
    found = (
        Question.query.filter_by(industry=industry, job_title=job_title,
                                 difficulty=difficulty or 'intermediate', is_public=True)
        .order_by(Question.id)
        .limit(MAX_INTERVIEW_QUESTIONS)
        .all()
    )
    if found:
        return found
    current_app.logger.info('No bank questions for %s / %s / %s, using the general set',
                            industry, job_title, difficulty)
    return general_questions()


def list_industries():
    rows = (db.session.query(Question.industry).filter(Question.is_public.is_(True))
            .distinct().order_by(Question.industry).all())
    return [r[0] for r in rows]


def find_questions(industry, job_title=None, difficulty=None, qtype=None):
    query = Question.query.filter_by(industry=industry, is_public=True)
    if job_title:
        query = query.filter(Question.job_title == job_title)
    if difficulty:
        query = query.filter(Question.difficulty == difficulty)
    if qtype:
        query = query.filter(Question.type == qtype)
    return query.order_by(Question.id).all()
