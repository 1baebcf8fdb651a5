"""Built-in locator set, overridable from config/selectors.yaml.

Entries are Playwright selectors. A value may be a plain string or a dict with
``primary`` and ``fallbacks``. ``{placeholders}`` are filled at call time.
"""

from typing import Any, Dict, Final

DEFAULT_SELECTORS: Final[Dict[str, Any]] = {
    "version": "builtin-1",
    "search": {
        "location_input": "input#bigsearch-query-location-input",
        "guests_toggle": "xpath=//div[normalize-space(text())='Add guests']",
        "guest_increase": "button[data-testid='stepper-{guest}-increase-button']",
        "search_button": "button[data-testid='structured-search-input-search-button']",
    },
    "calendar": {
        "toggle": "xpath=//div[normalize-space(text())='Add dates']",
        "next_month": "button[aria-label='Move forward to switch to the next month.']",
        "month_header": "xpath=//h2[normalize-space(text())='{label}']",
        "month_headers": "h2",
        "day_button": "button[data-state--date-string='{iso}']",
    },
    "results": {
        "card": "[data-testid='card-container']",
        "card_link": "a",
        "card_name": "[data-testid='listing-card-name']",
        "card_price_per_night": "span:has-text(' per night')",
        "card_total_price": "span:has-text(' total')",
        "card_rating": "span:has-text('average rating')",
        "card_rating_fallback": "span[aria-hidden='true']:has-text(' (')",
        "next_page": "a[aria-label='Next']",
    },
    "listing": {
        "name": "h1[elementtiming='LCP-target']",
        "price_per_night": "xpath=//span[contains(text(),' per night')]",
        "rating": (
            "xpath=//div[@aria-hidden='true' and normalize-space(text()) "
            "and contains(text(),'.')]"
        ),
        "checkin_date": "div[data-testid='change-dates-checkIn']",
        "checkout_date": "div[data-testid='change-dates-checkOut']",
        "guest_picker": "#GuestPicker-book_it-trigger",
        "guest_value": "span[data-testid='GuestPicker-book_it-form-{guest}-stepper-value']",
        "guest_decrease": (
            "button[data-testid='GuestPicker-book_it-form-{guest}-stepper-decrease-button']"
        ),
        "reserve_button": {
            "primary": "button[data-testid='homes-pdp-cta-btn']",
            "fallbacks": [
                "#site-content > div > div:nth-child(1) > div:nth-child(3) > div > div > div"
                " > div > div:nth-child(1) > div > div > div > div > div > div > div > div"
                " > div > button"
            ],
        },
        "dates_error": "#bookItTripDetailsError",
        "translation_close": "button[aria-label='Close']",
    },
    "reservation": {},
}
