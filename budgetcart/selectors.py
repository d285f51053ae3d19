"""Centralised selectors for the eBay shopping flow."""

# ==== HEADER / SEARCH ====
SEARCH_BOX = "input[type='text'][placeholder*='Search']"
SEARCH_BUTTON = "#gh-search-btn"
MAX_PRICE_INPUT = "input[name*='MaxPrice'], input[aria-label*='Maximum']"
MAX_PRICE_PROBE = "input[name*='MaxPrice']"
PRICE_SUBMIT = "button:has-text('Submit price range')"
PRICE_SUBMIT_PROBE = "button:has-text('Submit')"

# ==== RESULTS GRID ====
ITEM_CARD = "//li[@data-gr3 and @class='s-card s-card--vertical']"
ITEM_PRICE = "xpath=.//span[contains(@class, 's-item__price') or contains(@class, 'price')]"
ITEM_LINK = "xpath=.//a[contains(@href, 'itm/')]"
NEXT_PAGE = "a.pagination__next, a[aria-label='Go to next search page']"
NEXT_PAGE_PROBE = "a.pagination__next, a[aria-label*='next']"

# ==== PRODUCT PAGE ====
ADD_TO_CART = "//a[contains(@id,'atcBtn_btn')]"
QUANTITY_SELECT = "select[id*='quantity' i], select[name*='quantity' i]"
PRODUCT_PRICE = ".x-price-primary, [itemprop='price'], .vi-price, .display-price"
SIZE_DROPDOWN = "//span[text()='size:']"
SIZE_OPTIONS = (
    "//span[text()='size:']/ancestor::div[contains(@class,'vim') "
    "and contains(@class,'x-sku')]//div[@role='option']"
)
COLOR_DROPDOWN = "//span[text()='color:']"
COLOR_OPTIONS = (
    "//span[text()='color:']/ancestor::div[contains(@class,'vim') "
    "and contains(@class,'x-sku')]//div[@role='option']"
)
OTHER_VARIANT_SELECTS = "select[id*='msku'], select.x-msku__select"
HANDLED_VARIANT_IDS = ("quantity", "size", "color")

CAPTCHA_INDICATORS = (
    "iframe[title*='recaptcha']",
    "iframe[src*='captcha']",
    "[class*='captcha']",
    "#px-captcha",
    ".g-recaptcha",
    "text=Please verify you are a human",
    "text=Security Verification",
)

# ==== CART ====
CART_ICON = ".gh-cart"
REMOVE_BUTTONS = (
    "[data-test-id='cart-remove-item'], .remove-button, "
    "button:has-text('Remove'), a:has-text('Remove')"
)
# Ordered: the first visible one with a positive amount wins.
CART_TOTAL = (
    "[data-test-id='SUBTOTAL'] .text-display-24",
    ".cart-summary-amount",
    ".total-row .text-display-24",
    ".subtotal .text-display",
    "span:has-text('Subtotal') + span",
)
CART_ITEM_PRICE = ".item-price, .itemValue"
CART_COUNT = (
    "//*[@class='cart-summary-line-item']//span[contains(text(), 'Items')]",
    "#gh-cart-n",
    "span:has-text('item') i",
)
CART_ITEM_ROWS = ".cart-item, [data-test-id*='item']"

# ==== SIGN IN ====
LOGIN_USERNAME = "#userid"
LOGIN_PASSWORD = "#pass"
LOGIN_SUBMIT = "#sgnBt"
LOGIN_CONTINUE = "#signin-continue-btn"
