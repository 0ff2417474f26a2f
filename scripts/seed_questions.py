"""Load the starter interview question bank.

Usage:
  python scripts/seed_questions.py            # only if the bank is empty
  python scripts/seed_questions.py --replace  # drop public questions first
"""

import os
import sys

# Ensure project root is on sys.path when running from scripts/ or other cwd
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from careerzoom import create_app
from careerzoom.services.questions import seed_question_bank


def main():
    app = create_app()
    with app.app_context():
        count = seed_question_bank(replace='--replace' in sys.argv[1:])
        print(f'inserted {count} questions')


if __name__ == '__main__':
    main()
