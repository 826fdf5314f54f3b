"""
Tests for newsletter signup handlers and their registry.
"""

import pytest
import requests
from unittest.mock import Mock

from src.database.models import (
    NewsletterEmail, Subscription, SubscriptionStatus, SubscriptionType, User,
    create_database_engine, create_tables, get_session_maker
)
from src.newsletter_signup import (
    SubscribeHandler, AxiosEssentialsHandler, MorningBrewHandler, MilkRoadHandler,
    MoneyStuffHandler, get_subscribe_handler, list_providers
)
from src.orchestration import Unsubscriber
from src.orchestration.types import OUTCOME_UNSUBSCRIBED


@pytest.fixture
def session():
    """Create an in-memory database session for testing."""
    engine = create_database_engine("sqlite:///:memory:")
    create_tables(engine)
    session = get_session_maker(engine)()
    yield session
    session.close()


@pytest.fixture
def test_user(session):
    user = User(email='reader@example.com')
    session.add(user)
    session.commit()
    return user


@pytest.fixture
def http():
    """requests session double whose calls succeed."""
    http = Mock(spec=requests.Session)
    http.post.return_value = Mock(status_code=200)
    http.put.return_value = Mock(status_code=200)
    return http


class TestRegistry:
    """Provider key lookup."""

    def test_unknown_provider_returns_none(self, session):
        assert get_subscribe_handler('UNKNOWN_PROVIDER', session) is None

    @pytest.mark.parametrize('name,handler_class', [
        ('axios_essentials', AxiosEssentialsHandler),
        ('MORNING_BREW', MorningBrewHandler),
        ('Milk_Road', MilkRoadHandler),
        ('money_stuff', MoneyStuffHandler),
    ])
    def test_lookup_is_case_insensitive(self, session, name, handler_class):
        handler = get_subscribe_handler(name, session)

        assert isinstance(handler, handler_class)

    def test_list_providers(self):
        assert list_providers() == ['axios_essentials', 'milk_road', 'money_stuff', 'morning_brew']


class TestHandleSubscribe:
    """Shared signup workflow."""

    def test_morning_brew_creates_one_active_subscription(self, session, test_user, http):
        handler = get_subscribe_handler('morning_brew', session, http=http)

        subscriptions = handler.handle_subscribe(test_user.id, 'morning_brew')

        assert len(subscriptions) == 1
        subscription = subscriptions[0]
        assert subscription.name == 'Morning Brew'
        assert subscription.status == SubscriptionStatus.ACTIVE
        assert subscription.type == SubscriptionType.NEWSLETTER
        assert subscription.user_id == test_user.id

        newsletter_email = session.query(NewsletterEmail).filter_by(user_id=test_user.id).one()
        assert subscription.newsletter_email_id == newsletter_email.id
        assert session.query(Subscription).count() == 1

    def test_provider_called_with_provisioned_address(self, session, test_user, http):
        handler = MorningBrewHandler(session, http=http)

        handler.handle_subscribe(test_user.id, 'morning_brew')

        address = session.query(NewsletterEmail).filter_by(user_id=test_user.id).one().address
        payload = http.post.call_args.kwargs['json']
        assert payload['variables']['signupCreateInput']['email'] == address
        assert 'mutation CreateUserSubscription' in payload['query']

    def test_existing_newsletter_email_is_reused(self, session, test_user, http):
        existing = NewsletterEmail(user_id=test_user.id, address='reader-0001@inbox.example.com')
        session.add(existing)
        session.commit()
        provision = Mock()
        handler = MilkRoadHandler(session, http=http, provision_newsletter_email=provision)

        subscriptions = handler.handle_subscribe(test_user.id, 'milk_road')

        provision.assert_not_called()
        assert subscriptions[0].newsletter_email_id == existing.id
        assert http.post.call_args.kwargs['data'] == {
            'email': 'reader-0001@inbox.example.com', 'commit': 'Subscribe'
        }

    def test_axios_creates_row_per_newsletter(self, session, test_user, http):
        handler = AxiosEssentialsHandler(session, http=http)

        subscriptions = handler.handle_subscribe(test_user.id, 'axios_essentials')

        assert sorted(s.name for s in subscriptions) == ['Axios AM', 'Axios Finish Line', 'Axios PM']
        assert session.query(Subscription).count() == 3

    def test_money_stuff_uses_put(self, session, test_user, http):
        handler = MoneyStuffHandler(session, http=http)

        subscriptions = handler.handle_subscribe(test_user.id, 'money_stuff')

        assert [s.name for s in subscriptions] == ['Money Stuff']
        http.put.assert_called_once()
        assert http.put.call_args.kwargs['json'] == {'Money Stuff': True}
        http.post.assert_not_called()

    def test_provider_failure_returns_none(self, session, test_user, http):
        http.post.side_effect = requests.exceptions.ConnectionError('refused')
        handler = MorningBrewHandler(session, http=http)

        assert handler.handle_subscribe(test_user.id, 'morning_brew') is None
        assert session.query(Subscription).count() == 0

    def test_provider_error_status_returns_none(self, session, test_user, http):
        http.post.return_value.raise_for_status.side_effect = requests.exceptions.HTTPError('500')
        handler = AxiosEssentialsHandler(session, http=http)

        assert handler.handle_subscribe(test_user.id, 'axios_essentials') is None
        assert session.query(Subscription).count() == 0

    def test_base_handler_subscribes_to_nothing(self, session, test_user, http):
        handler = SubscribeHandler(session, http=http)

        assert handler.handle_subscribe(test_user.id, 'base') is None

    def test_unknown_user_returns_none(self, session, http):
        handler = MorningBrewHandler(session, http=http)

        assert handler.handle_subscribe(999, 'morning_brew') is None
        http.post.assert_not_called()

    def test_resubscribe_does_not_duplicate(self, session, test_user, http):
        handler = MorningBrewHandler(session, http=http)

        first = handler.handle_subscribe(test_user.id, 'morning_brew')
        first_id = first[0].id
        second = handler.handle_subscribe(test_user.id, 'morning_brew')

        assert second[0].id == first_id
        assert session.query(Subscription).count() == 1

    def test_resubscribe_after_unsubscribe_reactivates_row(self, session, test_user, http):
        handler = MorningBrewHandler(session, http=http)
        first = handler.handle_subscribe(test_user.id, 'morning_brew')[0]
        first_id = first.id
        # No mailto target, so the row is kept and demoted
        outcome = Unsubscriber(session, email_executor=Mock()).unsubscribe(first)
        assert outcome.action == OUTCOME_UNSUBSCRIBED

        second = handler.handle_subscribe(test_user.id, 'morning_brew')

        assert [s.id for s in second] == [first_id]
        assert second[0].status == SubscriptionStatus.ACTIVE
        newsletter_email = session.query(NewsletterEmail).filter_by(user_id=test_user.id).one()
        assert second[0].newsletter_email_id == newsletter_email.id
