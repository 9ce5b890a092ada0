from tumblrcrawl import config


class BlogUrlBuilder:
    """Builds blog and listing-page URLs from a `{blog_id}` template."""

    def __init__(self, template: str = config.DEFAULT_BLOG_URL_TEMPLATE):
        if "{blog_id}" not in template:
            raise ValueError("blog URL template must contain {blog_id}")
        self.template = template.rstrip("/")

    def blog_url(self, blog_id: str) -> str:
        return self.template.format(blog_id=blog_id)

    def page_url(self, blog_id: str, page_number: int) -> str:
        return f"{self.blog_url(blog_id)}/page/{int(page_number)}"
