"""Shared selectors for the CRM list-view pages.

The application renders every list view with the same Ant Design widget
vocabulary, so verifier defaults are looked up here by semantic name.
Template changes should only require edits in this table.
"""

SELECTORS = {
    # Search box and its clear icon
    "search.input": '.ant-input[placeholder="Type and hit Enter"]',
    "search.clear": ".ant-input-clear-icon",
    # Table
    "table": ".ant-table",
    "table.row": ".ant-table-row",
    "table.body_row": "tbody tr",
    "table.header": "th",
    "table.column_title": ".ant-table-column-title",
    "table.sorters": ".ant-table-column-sorters",
    # Toolbar icons
    "toolbar.sync": ".anticon-sync",
    "toolbar.more": ".anticon-more",
    "toolbar.expand": ".anticon-expand",
    "toolbar.compress": ".anticon-compress",
    "loading": ".ant-spin-nested-loading",
    "fullscreen.wrapper": 'div[style*="position: fixed"][style*="width: 100vw"]',
    # Column visibility popover
    "popover": ".ant-popover",
    "popover.content": ".ant-popover-inner-content",
    # Pagination
    "pagination.prev": ".ant-pagination-prev",
    "pagination.next": ".ant-pagination-next",
    "pagination.active": ".ant-pagination-item-active",
    "pagination.size": ".ant-pagination-options .ant-select-selector",
    "pagination.jumper": ".ant-pagination-options-quick-jumper input",
    "select.option": ".ant-select-item-option",
    # Filters form
    "form.row": ".ant-form-item-row",
    "form.clear": "[data-icon='close-circle']",
    # Page chrome
    "page.title": ".this-is-a-title.two",
}

# Class names toggled on sortable header cells
UNSORTED_CLASS = "ant-table-column-has-sorters"
SORTED_CLASS = "ant-table-column-sort"


def sel(name: str) -> str:  # small helper, inline access
    return SELECTORS[name]
