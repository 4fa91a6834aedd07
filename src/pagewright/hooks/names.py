"""Known extension points.

Adding an extension point means adding it here; the registries reset to
exactly these names. Other names may still be registered but nothing in
pagewright dispatches them.
"""

from enum import StrEnum


class FilterName(StrEnum):
    COLUMN_PROPS = "columnProps"
    CONTAINER_PROPS = "containerProps"
    FORM_OPTION_PROPS = "formOptionProps"
    FORM_FIELD_PROPS = "formFieldProps"
    FORM_PROPS = "formProps"
    RICH_TEXT_PROPS = "richTextProps"
    RICH_TEXT_OUTPUT = "richTextOutput"
    RICH_TEXT_CONTENT_ITEM = "richTextContentItem"
    RICH_TEXT_CONTENT = "richTextContent"
    RICH_TEXT_CONTENT_OUTPUT = "richTextContentOutput"
    RENDER_ITEM = "renderItem"
    RENDER_ITEM_DATA = "renderItemData"
    RENDER_CONTENT = "renderContent"
    SERVERLESS_RESULT = "serverlessResult"
    CONTACT_RESULT = "contactResult"
    CACHE_DATA = "cacheData"
    STORE_DATA = "storeData"
    CONTENTFUL_DATA = "contentfulData"
    WORDPRESS_DATA = "wordpressData"
    LOCAL_DATA = "localData"
    ALL_DATA = "allData"
    SLUG_PARTS = "slugParts"
    SLUG = "slug"


class ActionName(StrEnum):
    RENDER_START = "renderStart"
    RENDER_END = "renderEnd"
    RENDER_ITEM_START = "renderItemStart"
    RENDER_ITEM_END = "renderItemEnd"
