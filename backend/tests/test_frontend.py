import httpx


ALICE = {'id': 1, 'name': 'Alice', 'email': 'alice@x.com', 'phone': None, 'dateOfBirth': '2001-02-03T00:00:00'}


def _form(**fields):
    data = {'name': 'Alice', 'email': 'alice@x.com', 'phone': '', 'dateOfBirth': ''}
    data.update(fields)
    return data


def test_list_renders_records_and_filters(api, frontend):
    api.post('/api/students', json={'name': 'Alice', 'email': 'alice@x.com'})
    api.post('/api/students', json={'name': 'Bob', 'email': 'bob@x.com'})
    r = frontend.get('/')
    assert r.status_code == 200
    assert 'Alice' in r.text and 'Bob' in r.text
    r = frontend.get('/', params={'searchString': 'Bo'})
    assert 'Bob' in r.text and 'Alice' not in r.text
    assert 'value="Bo"' in r.text


def test_list_forwards_search_term_escaped(frontend_with):
    client, calls = frontend_with(lambda request: httpx.Response(200, json=[]))
    r = client.get('/', params={'searchString': 'a b&c'})
    assert r.status_code == 200
    assert calls[0].url.path == '/api/students'
    assert calls[0].url.params['searchString'] == 'a b&c'
    client.get('/')
    assert 'searchString' not in calls[1].url.params


def test_list_escapes_record_values(frontend_with):
    evil = dict(ALICE, name='<script>x</script>')
    client, _ = frontend_with(lambda request: httpx.Response(200, json=[evil]))
    r = client.get('/')
    assert '<script>x</script>' not in r.text
    assert '&lt;script&gt;' in r.text


def test_create_page_is_empty_form(frontend_with):
    client, calls = frontend_with(lambda request: httpx.Response(500))
    r = client.get('/students/create')
    assert r.status_code == 200
    assert 'name="name" value=""' in r.text
    assert calls == []


def test_create_success_redirects_to_list(api, frontend):
    r = frontend.post('/students/create', data=_form(phone='555-0100', dateOfBirth='2001-02-03'))
    assert r.status_code == 303
    assert r.headers['location'] == '/'
    assert api.get('/api/students/1').json() == dict(ALICE, phone='555-0100')


def test_create_invalid_rerenders_without_calling_api(frontend_with):
    client, calls = frontend_with(lambda request: httpx.Response(201, json=ALICE))
    r = client.post('/students/create', data=_form(name='', email='bad'))
    assert r.status_code == 200
    assert 'The Name field is required.' in r.text
    assert 'value="bad"' in r.text
    assert calls == []


def test_create_upstream_500_keeps_input(frontend_with):
    client, calls = frontend_with(lambda request: httpx.Response(500))
    r = client.post('/students/create', data=_form(phone='555-0100'))
    assert r.status_code == 200
    assert 'API error: 500' in r.text
    assert 'value="Alice"' in r.text
    assert 'value="alice@x.com"' in r.text
    assert 'value="555-0100"' in r.text
    assert len(calls) == 1


def test_create_upstream_unreachable_is_reported(frontend_with):
    def handler(request):
        raise httpx.ConnectError('refused', request=request)

    client, _ = frontend_with(handler)
    r = client.post('/students/create', data=_form())
    assert r.status_code == 200
    assert 'API error: 503' in r.text
    assert 'value="Alice"' in r.text


def test_edit_page_loads_record(frontend_with):
    client, _ = frontend_with(lambda request: httpx.Response(200, json=ALICE))
    r = client.get('/students/1/edit')
    assert r.status_code == 200
    assert 'value="Alice"' in r.text
    assert 'value="2001-02-03"' in r.text
    assert 'name="id" value="1"' in r.text


def test_edit_page_missing_is_404(frontend_with):
    client, _ = frontend_with(lambda request: httpx.Response(404))
    assert client.get('/students/9/edit').status_code == 404


def test_edit_id_mismatch_rejected_before_any_call(frontend_with):
    client, calls = frontend_with(lambda request: httpx.Response(204))
    r = client.post('/students/2/edit', data=_form(id='3'))
    assert r.status_code == 400
    assert calls == []


def test_edit_success_updates_and_redirects(api, frontend):
    api.post('/api/students', json={'name': 'Alice', 'email': 'alice@x.com'})
    r = frontend.post('/students/1/edit', data=_form(id='1', name='Alicia'))
    assert r.status_code == 303
    assert api.get('/api/students/1').json()['name'] == 'Alicia'


def test_edit_upstream_failure_rerenders(frontend_with):
    client, _ = frontend_with(lambda request: httpx.Response(404))
    r = client.post('/students/1/edit', data=_form(id='1', name='Alicia'))
    assert r.status_code == 200
    assert 'API error: 404' in r.text
    assert 'value="Alicia"' in r.text


def test_delete_page_shows_record_or_404(frontend_with):
    client, _ = frontend_with(lambda request: httpx.Response(200, json=ALICE))
    r = client.get('/students/1/delete')
    assert r.status_code == 200
    assert 'Alice' in r.text
    client, _ = frontend_with(lambda request: httpx.Response(404))
    assert client.get('/students/1/delete').status_code == 404


def test_delete_success_redirects(api, frontend):
    api.post('/api/students', json={'name': 'Alice', 'email': 'alice@x.com'})
    r = frontend.post('/students/1/delete')
    assert r.status_code == 303
    assert r.headers['location'] == '/'
    assert api.get('/api/students/1').status_code == 404


def test_delete_failure_refetches_and_shows_error(frontend_with):
    def handler(request):
        if request.method == 'DELETE':
            return httpx.Response(500)
        return httpx.Response(200, json=ALICE)

    client, calls = frontend_with(handler)
    r = client.post('/students/1/delete')
    assert r.status_code == 200
    assert 'API error: 500' in r.text
    assert 'Alice' in r.text
    assert [c.method for c in calls] == ['DELETE', 'GET']


def test_delete_of_vanished_record_is_404(frontend_with):
    client, _ = frontend_with(lambda request: httpx.Response(404))
    assert client.post('/students/1/delete').status_code == 404


def test_read_failure_renders_error_page(frontend_with):
    client, _ = frontend_with(lambda request: httpx.Response(503))
    r = client.get('/')
    assert r.status_code == 502
    assert 'API error: 503' in r.text


def test_request_id_forwarded_upstream(frontend_with):
    client, calls = frontend_with(lambda request: httpx.Response(200, json=[]))
    client.get('/', headers={'X-Request-ID': 'req-1'})
    assert calls[0].headers['x-request-id'] == 'req-1'


def test_edit_invalid_rerenders_without_calling_api(frontend_with):
    client, calls = frontend_with(lambda request: httpx.Response(204))
    r = client.post('/students/1/edit', data=_form(id='1', email='bad'))
    assert r.status_code == 200
    assert 'value="bad"' in r.text
    assert 'value="Alice"' in r.text
    assert calls == []


def test_edit_page_read_failure_renders_error_page(frontend_with):
    client, _ = frontend_with(lambda request: httpx.Response(500))
    r = client.get('/students/1/edit')
    assert r.status_code == 502
    assert 'API error: 500' in r.text


def test_delete_page_read_failure_renders_error_page(frontend_with):
    client, _ = frontend_with(lambda request: httpx.Response(500))
    r = client.get('/students/1/delete')
    assert r.status_code == 502
    assert 'API error: 500' in r.text


def test_delete_failure_with_failed_refetch_renders_error_page(frontend_with):
    client, calls = frontend_with(lambda request: httpx.Response(500))
    r = client.post('/students/1/delete')
    assert r.status_code == 502
    assert 'API error: 500' in r.text
    assert [c.method for c in calls] == ['DELETE', 'GET']


def test_list_links_use_record_ids(frontend_with):
    client, _ = frontend_with(lambda request: httpx.Response(200, json=[ALICE]))
    r = client.get('/')
    assert 'href="/students/1/edit"' in r.text
    assert 'href="/students/1/delete"' in r.text
