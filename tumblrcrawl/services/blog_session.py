from __future__ import annotations

import copy
from typing import Optional

import requests

from tumblrcrawl import config

# Posted by LoginService; credentials and form_key are filled in per login.
DEFAULT_LOGIN_FORM = {
    "determine_email": None,
    "user[email]": None,
    "user[password]": None,
    "tumblelog[name]": "",
    "user[age]": "",
    "context": "home_signup",
    "version": "STANDARD",
    "follow": "",
    "http_referer": "https://www.tumblr.com/",
    "seen_suggestion": "0",
    "used_suggestion": "0",
    "used_auto_suggestion": "0",
    "about_tumblr_slide": "",
    "random_username_suggestions": '[""]',
}


class BlogSession:
    """Cookies, proxy and user agents shared by every request of a crawl.

    The session is configured (and logged in, if needed) before a crawl
    starts. The crawl itself only reads from it.
    """

    def __init__(
        self,
        *,
        cookie_jar=None,
        user_agent: Optional[str] = None,
        mobile_user_agent: Optional[str] = None,
        proxy_url: Optional[str] = None,
        http: Optional[requests.Session] = None,
    ):
        self.http = http or requests.Session()
        if cookie_jar is not None:
            self.http.cookies = cookie_jar
        self.user_agent = user_agent or config.DEFAULT_USER_AGENT
        self.mobile_user_agent = mobile_user_agent or config.DEFAULT_MOBILE_USER_AGENT
        self.proxy_url = proxy_url
        if proxy_url:
            self.http.proxies.update({"http": proxy_url, "https": proxy_url})
        self.headers = {"User-Agent": self.user_agent}
        self.http.headers.update(self.headers)
        self.login_form_template = copy.deepcopy(DEFAULT_LOGIN_FORM)

    @property
    def cookies(self):
        return self.http.cookies

    @cookies.setter
    def cookies(self, value):
        self.http.cookies = value

    @property
    def xhr_headers(self) -> dict:
        """Headers for listing and photoset requests."""
        headers = dict(self.headers)
        headers.update({
            "User-Agent": self.mobile_user_agent,
            "X-Requested-With": "XMLHttpRequest",
        })
        return headers

    def request(self, method: str, url: str, **kwargs):
        return self.http.request(method, url, **kwargs)

    def close(self) -> None:
        self.http.close()

    def __repr__(self):
        return f"<BlogSession ua={self.user_agent!r} proxy={self.proxy_url!r}>"
