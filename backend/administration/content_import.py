"""
Fetch an external web page and extract article metadata and text
"""
import logging
import re

import requests
from bs4 import BeautifulSoup
from django.conf import settings

logger = logging.getLogger(__name__)

PREVIEW_USER_AGENT = 'Mozilla/5.0 (compatible; Content-Preview-Bot/1.0)'
IMPORT_USER_AGENT = 'Mozilla/5.0 (compatible; Content-Import-Bot/1.0)'

PREVIEW_CONTENT_LIMIT = 1000
IMPORT_CONTENT_LIMIT = 5000

# Article.title / Article.author column widths
TITLE_MAX_LENGTH = 500
AUTHOR_MAX_LENGTH = 255


class ContentFetchError(Exception):
    pass


def is_valid_url(url):
    return isinstance(url, str) and re.match(r'^https?://\S+$', url.strip()) is not None


def fetch_html(url, user_agent, timeout=None):
    """Download a page, raising ContentFetchError on network or HTTP failure"""
    timeout = timeout or settings.ARTICLE_FETCH_TIMEOUT
    try:
        response = requests.get(url, headers={'User-Agent': user_agent}, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        logger.warning(f"Failed to fetch content from {url}: {str(e)}")
        raise ContentFetchError(str(e))
    return response.text


def _meta_content(soup, name):
    tag = soup.find('meta', attrs={'name': re.compile(rf'^{name}$', re.I)})
    if tag is None:
        return ''
    return (tag.get('content') or '').strip()


def extract_text(soup, remove_tags, limit):
    if soup.head is not None:
        soup.head.decompose()
    for tag in soup(list(remove_tags)):
        if not tag.decomposed:
            tag.decompose()
    root = soup.body if soup.body is not None else soup
    text = ' '.join(root.get_text(separator=' ', strip=True).split())
    if len(text) > limit:
        text = text[:limit] + '...'
    return text


def extract_article(markup, default_title, default_author, remove_tags, limit):
    soup = BeautifulSoup(markup, 'html.parser')

    title = soup.title.get_text(strip=True) if soup.title else ''
    author = _meta_content(soup, 'author')
    return {
        'title': (title or default_title)[:TITLE_MAX_LENGTH],
        'author': (author or default_author)[:AUTHOR_MAX_LENGTH],
        'description': _meta_content(soup, 'description'),
        'content': extract_text(soup, remove_tags, limit),
    }


def preview_content(url):
    """Title, author, description and a short text preview of a page"""
    markup = fetch_html(url, PREVIEW_USER_AGENT, timeout=min(10, settings.ARTICLE_FETCH_TIMEOUT))
    data = extract_article(markup, 'Untitled', '', ['script', 'style'], PREVIEW_CONTENT_LIMIT)
    data['url'] = url
    return data


def import_content(url):
    """Article fields for a page, with navigation chrome removed"""
    markup = fetch_html(url, IMPORT_USER_AGENT)
    return extract_article(
        markup, 'Imported Article', 'Unknown',
        ['script', 'style', 'nav', 'header', 'footer'],
        IMPORT_CONTENT_LIMIT,
    )
