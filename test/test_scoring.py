"""
Test cases for answer scoring and the public play flow.
"""
import uuid
from types import SimpleNamespace

from app.models import Attempt
from app.services.scoring_service import scoring_service
from app.utils.numbers import percent


def make_question(*correct_flags):
    options = [SimpleNamespace(id=uuid.uuid4(), is_correct=flag) for flag in correct_flags]
    return SimpleNamespace(id=uuid.uuid4(), options=options)


def answer(question, index):
    return {str(question.id): str(question.options[index].id)}


class TestPercent:
    """Test cases for whole-number percentages."""

    def test_rounds_to_nearest(self):
        assert percent(2, 3) == 67
        assert percent(1, 3) == 33

    def test_half_rounds_up(self):
        assert percent(1, 8) == 13

    def test_zero_total_is_zero(self):
        assert percent(0, 0) == 0
        assert percent(3, 0) == 0

    def test_above_hundred(self):
        assert percent(5, 2) == 250


class TestScoringService:
    """Test cases for scoring answers against correct options."""

    def test_mixed_answers(self):
        """Q1 A correct, Q2 B correct, Q3 A correct; answered A, A, B."""
        q1, q2, q3 = make_question(True, False), make_question(False, True), make_question(True, False)
        answers = {**answer(q1, 0), **answer(q2, 0), **answer(q3, 1)}

        result = scoring_service.score([q1, q2, q3], answers)

        assert result == {'score': 1, 'total': 3, 'percentage': 33}

    def test_two_of_three_rounds_up(self):
        """Same quiz answered A, B, B: only Q3 is wrong."""
        q1, q2, q3 = make_question(True, False), make_question(False, True), make_question(True, False)
        answers = {**answer(q1, 0), **answer(q2, 1), **answer(q3, 1)}

        result = scoring_service.score([q1, q2, q3], answers)

        assert result == {'score': 2, 'total': 3, 'percentage': 67}

    def test_empty_answers(self):
        questions = [make_question(True, False) for _ in range(4)]

        result = scoring_service.score(questions, {})

        assert result == {'score': 0, 'total': 4, 'percentage': 0}

    def test_total_counts_unanswered_questions(self):
        questions = [make_question(True, False) for _ in range(5)]

        result = scoring_service.score(questions, answer(questions[0], 0))

        assert result['total'] == 5
        assert result['score'] == 1
        assert result['percentage'] == 20

    def test_unknown_option_scores_zero(self):
        question = make_question(True, False)

        result = scoring_service.score([question], {str(question.id): str(uuid.uuid4())})

        assert result['score'] == 0

    def test_answer_for_foreign_question_ignored(self):
        question = make_question(True, False)
        stranger = make_question(True, False)

        result = scoring_service.score([question], answer(stranger, 0))

        assert result == {'score': 0, 'total': 1, 'percentage': 0}

    def test_option_from_other_question_scores_zero(self):
        q1, q2 = make_question(True, False), make_question(True, False)

        result = scoring_service.score([q1, q2], {str(q1.id): str(q2.options[0].id)})

        assert result['score'] == 0

    def test_any_correct_option_scores(self):
        question = make_question(True, True, False)

        assert scoring_service.score([question], answer(question, 0))['score'] == 1
        assert scoring_service.score([question], answer(question, 1))['score'] == 1
        assert scoring_service.score([question], answer(question, 2))['score'] == 0

    def test_no_questions(self):
        assert scoring_service.score([], {'x': 'y'}) == {'score': 0, 'total': 0, 'percentage': 0}


class TestPlayView:
    """Test cases for the public quiz view."""

    def test_play_hides_correctness(self, client, capitals_quiz):
        response = client.get(f"/api/play/{capitals_quiz['slug']}")
        assert response.status_code == 200
        data = response.json()

        assert data['id'] == capitals_quiz['id']
        assert [q['text'] for q in data['questions']] == [
            'Capital of France?', 'Capital of Italy?', 'Capital of Spain?'
        ]
        for question in data['questions']:
            for option in question['options']:
                assert 'isCorrect' not in option
        assert 'slug' not in data
        assert data['finalPage']['title'] == 'Congratulations!'

    def test_play_needs_no_auth(self, client, capitals_quiz):
        response = client.get(f"/api/play/{capitals_quiz['slug']}")
        assert response.status_code == 200

    def test_unknown_slug(self, client):
        response = client.get('/api/play/zzzzzzzz')
        assert response.status_code == 404
        assert response.json()['error'] == 'not_found'

    def test_private_quiz_not_found(self, client, create_quiz):
        quiz = create_quiz(isPublic=False)
        response = client.get(f"/api/play/{quiz['slug']}")
        assert response.status_code == 404

    def test_play_view_is_cached(self, client, capitals_quiz, fake_redis):
        slug = capitals_quiz['slug']

        first = client.get(f'/api/play/{slug}')
        assert first.status_code == 200
        assert f'play:{slug}' in fake_redis.store

        second = client.get(f'/api/play/{slug}')
        assert second.json() == first.json()

    def test_update_invalidates_cache(self, client, capitals_quiz, auth_headers, fake_redis):
        slug = capitals_quiz['slug']
        client.get(f'/api/play/{slug}')

        response = client.put(
            f"/api/quizzes/{capitals_quiz['id']}",
            json={'title': 'European capitals'},
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert f'play:{slug}' not in fake_redis.store

        assert client.get(f'/api/play/{slug}').json()['title'] == 'European capitals'

    def test_unpublish_takes_effect_with_cache(self, client, capitals_quiz, auth_headers, fake_redis):
        slug = capitals_quiz['slug']
        client.get(f'/api/play/{slug}')

        client.put(f"/api/quizzes/{capitals_quiz['id']}", json={'isPublic': False}, headers=auth_headers)

        assert client.get(f'/api/play/{slug}').status_code == 404


class TestSubmission:
    """Test cases for submitting answers."""

    def _answers(self, quiz, picks):
        return {
            question['id']: question['options'][pick]['id']
            for question, pick in zip(quiz['questions'], picks)
        }

    def test_submit_scores_and_returns_final_page(self, client, capitals_quiz):
        answers = self._answers(capitals_quiz, [0, 1, 1])

        response = client.post(f"/api/play/{capitals_quiz['slug']}/submit", json={'answers': answers})

        assert response.status_code == 200
        data = response.json()
        assert data['score'] == 2
        assert data['total'] == 3
        assert data['percentage'] == 67
        assert data['finalPage']['buttonAction'] == 'retake'

    def test_submit_all_correct(self, client, capitals_quiz):
        answers = self._answers(capitals_quiz, [0, 1, 0])

        data = client.post(f"/api/play/{capitals_quiz['slug']}/submit", json={'answers': answers}).json()

        assert (data['score'], data['total'], data['percentage']) == (3, 3, 100)

    def test_submit_stores_attempt(self, client, capitals_quiz, db_session):
        answers = self._answers(capitals_quiz, [0])

        client.post(f"/api/play/{capitals_quiz['slug']}/submit", json={'answers': answers})

        attempts = db_session.query(Attempt).all()
        assert len(attempts) == 1
        assert attempts[0].answers == answers
        assert attempts[0].score == 1
        assert attempts[0].total == 3

    def test_submit_empty_answers(self, client, capitals_quiz):
        data = client.post(f"/api/play/{capitals_quiz['slug']}/submit", json={'answers': {}}).json()
        assert (data['score'], data['total'], data['percentage']) == (0, 3, 0)

    def test_submit_unknown_slug(self, client):
        response = client.post('/api/play/zzzzzzzz/submit', json={'answers': {}})
        assert response.status_code == 404

    def test_submit_private_quiz_forbidden(self, client, create_quiz, db_session):
        quiz = create_quiz(isPublic=False)

        response = client.post(f"/api/play/{quiz['slug']}/submit", json={'answers': {}})

        assert response.status_code == 403
        assert db_session.query(Attempt).count() == 0

    def test_submit_malformed_answers(self, client, capitals_quiz, db_session):
        slug = capitals_quiz['slug']

        assert client.post(f'/api/play/{slug}/submit', json={}).status_code == 400
        assert client.post(f'/api/play/{slug}/submit', json={'answers': ['a']}).status_code == 400
        assert client.post(f'/api/play/{slug}/submit', json={'answers': {'q': 1}}).status_code == 400
        assert db_session.query(Attempt).count() == 0
