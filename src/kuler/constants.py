"""Service endpoints and fixed values for the Kuler feeds."""

from typing import Final

# Service locations
BASE_URL: Final = "https://kuler-api.adobe.com/"
PUBLIC_URL: Final = "https://kuler.adobe.com/"

# Feed endpoints, relative to BASE_URL
ENDPOINT_GET: Final = "rss/get.cfm"
ENDPOINT_SEARCH: Final = "rss/search.cfm"
ENDPOINT_COMMENTS: Final = "rss/comments.cfm"
ENDPOINT_THUMBNAIL: Final = "rss/png/generateThemePng.cfm"

# Public site theme page, relative to PUBLIC_URL
VIEW_FRAGMENT: Final = "#themeID/{theme_id}"

# Allowed values for the listType parameter of the get feed
LIST_TYPES: Final = ("recent", "popular", "rating", "random")

# Filter fields understood by the search feed ("field:value")
SEARCH_FILTERS: Final = ("themeID", "userID", "email", "tag", "hex", "title")

# Namespace of the theme/comment payload inside each <item>
KULER_PREFIX: Final = "kuler"
KULER_NAMESPACE: Final = "http://kuler.adobe.com/kuler/API/rss/"

# Paging
DEFAULT_ITEMS_PER_PAGE: Final = 20
MIN_ITEMS_PER_PAGE: Final = 1
MAX_ITEMS_PER_PAGE: Final = 100

# Seconds to wait for the service before giving up
DEFAULT_TIMEOUT: Final = 10.0
