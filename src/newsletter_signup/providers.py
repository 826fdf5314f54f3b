"""
Signup strategies for supported newsletter providers.

Each handler makes one request to the provider's public signup endpoint
and returns the fixed set of newsletters that request enables.
"""

from typing import List

from .base_handler import SubscribeHandler


class AxiosEssentialsHandler(SubscribeHandler):
    """Axios AM, PM and Finish Line."""

    key = 'axios_essentials'
    url = 'https://api.axios.com/api/render/readers/unauth-sub/'
    newsletters = ['Axios AM', 'Axios PM', 'Axios Finish Line']

    def _subscribe(self, email: str) -> List[str]:
        payload = {
            'lists': ['newsletter_axiosam', 'newsletter_axiospm', 'newsletter_axiosfinishline'],
            'user_vars': {
                'source': 'axios',
                'medium': None,
                'campaign': None,
                'term': None,
                'content': None,
                'page': 'webflow-newsletters-all',
            },
            'email': email,
        }
        response = self.http.post(self.url, json=payload, timeout=self.timeout)
        response.raise_for_status()
        return list(self.newsletters)


CREATE_USER_SUBSCRIPTION_MUTATION = """\
mutation CreateUserSubscription($signupCreateInput: SignupCreateInput!, $signupCreateVerticalSlug: String!) {
  signupCreate(input: $signupCreateInput, verticalSlug: $signupCreateVerticalSlug) {
    user {
      accessToken
      email
      hasSeenOnboarding
      referralCode
      verticalSubscriptions {
        isActive
        vertical {
          slug
          __typename
        }
        __typename
      }
      __typename
    }
    isNewSubscription
    fromAffiliate
    subscriptionId
    __typename
  }
}
"""


class MorningBrewHandler(SubscribeHandler):
    """Morning Brew daily, via its GraphQL API."""

    key = 'morning_brew'
    url = 'https://singularity.morningbrew.com/graphql'
    newsletters = ['Morning Brew']

    def _subscribe(self, email: str) -> List[str]:
        payload = {
            'operationName': 'CreateUserSubscription',
            'variables': {
                'signupCreateInput': {
                    'email': email,
                    'kid': None,
                    'gclid': None,
                    'utmCampaign': 'mb',
                    'utmMedium': 'website',
                    'utmSource': 'hero-module',
                    'utmContent': None,
                    'utmTerm': None,
                    'requestPath': 'https://www.morningbrew.com/daily',
                    'uiModule': 'hero-module',
                },
                'signupCreateVerticalSlug': 'daily',
            },
            'query': CREATE_USER_SUBSCRIPTION_MUTATION,
        }
        response = self.http.post(self.url, json=payload, timeout=self.timeout)
        response.raise_for_status()
        return list(self.newsletters)


class MilkRoadHandler(SubscribeHandler):
    """Milk Road, via its signup form."""

    key = 'milk_road'
    url = 'https://www.milkroad.com/subscriptions'
    newsletters = ['Milk Road']

    def _subscribe(self, email: str) -> List[str]:
        response = self.http.post(
            self.url,
            data={'email': email, 'commit': 'Subscribe'},
            timeout=self.timeout
        )
        response.raise_for_status()
        return list(self.newsletters)


class MoneyStuffHandler(SubscribeHandler):
    """Bloomberg's Money Stuff, via the newsletter preferences API."""

    key = 'money_stuff'
    url = 'https://login.bloomberg.com/api/newsletters/update'
    newsletters = ['Money Stuff']

    def _subscribe(self, email: str) -> List[str]:
        response = self.http.put(
            self.url,
            params={'email': email, 'source': '', 'notify': 'true', 'optIn': 'false'},
            json={'Money Stuff': True},
            timeout=self.timeout
        )
        response.raise_for_status()
        return list(self.newsletters)
