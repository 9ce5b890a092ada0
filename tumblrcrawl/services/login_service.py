import copy
import logging
from typing import NamedTuple

from tumblrcrawl.exceptions import ExtractionError, LoginError
from tumblrcrawl.services.blog_session import BlogSession
from tumblrcrawl.services.fetcher import DocumentFetcher

logger = logging.getLogger(__name__)

LOGIN_URL = "https://www.tumblr.com/login"
DASHBOARD_URL = "https://www.tumblr.com/dashboard"


class LoginResult(NamedTuple):
    already_logged_in: bool


class LoginService:
    """Logs a BlogSession into a Tumblr account.

    Must run before a crawl starts; the cookies it obtains land in the
    session's cookie jar and are sent with every crawl request.
    """

    def __init__(self, fetcher: DocumentFetcher, session: BlogSession):
        self.fetcher = fetcher
        self.session = session

    def get_login_form(self) -> dict:
        """Return a copy of the session's login form with the CSRF `form_key` set."""
        document = self.fetcher.fetch(LOGIN_URL)
        meta = document.select_one('meta[name="tumblr-form-key"]')
        if meta is None or not meta.get("content"):
            raise ExtractionError("login page has no tumblr-form-key", LOGIN_URL)
        form = copy.deepcopy(self.session.login_form_template)
        form["form_key"] = meta["content"]
        return form

    def post_login_form(self, form: dict) -> None:
        document = self.fetcher.fetch(LOGIN_URL, method="POST", data=form)
        error_box = document.select("#signup_forms .error")
        if error_box:
            raise LoginError(" ".join(el.get_text(strip=True) for el in error_box))

    def login(self, username: str, password: str) -> LoginResult:
        document = self.fetcher.fetch(DASHBOARD_URL)
        if document.select_one("#signup_forms") is None:
            logger.info("Session is already logged in")
            return LoginResult(already_logged_in=True)

        form = self.get_login_form()
        form.update({
            "determine_email": username,
            "user[email]": username,
            "user[password]": password,
        })
        self.post_login_form(form)
        logger.info("Logged in as %s", username)
        return LoginResult(already_logged_in=False)
