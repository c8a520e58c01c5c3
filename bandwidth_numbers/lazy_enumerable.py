def get_page_enumerator(client, get_first_page):
    """
    Returns api result pages as "lazy" collection.
    Makes api requests for next pages on demand only.
    :type client: bandwidth_numbers.account.Client
    :param client: account client
    :type get_first_page: types.FunctionType
    :param get_first_page: function which returns first page (an XmlBody with a next_link)

    :rtype: types.GeneratorType
    :returns: lazy collection of pages, a new page object for each step
    """
    page = get_first_page()
    while True:
        yield page

        next_page_url = page.next_link
        if not next_page_url:
            break

        text, _, _ = client._make_request('get', next_page_url)
        page = page.with_text(text)


def get_lazy_enumerator(client, get_first_page, item_parser=None):
    """
    Returns api results as "lazy" collection of items across all pages.
    :type item_parser: types.FunctionType
    :param item_parser: function which returns items of a page (default is page.numbers)

    :rtype: types.GeneratorType
    :returns: lazy collection
    """
    for page in get_page_enumerator(client, get_first_page):
        if item_parser: items = item_parser(page)
        else: items = page.numbers

        for item in items:
            yield item
