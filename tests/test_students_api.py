import pytest

STUDENTS = '/api/v1/students'


def create(client, payload):
    return client.post(STUDENTS, json=payload)


def test_create_student_returns_201_and_message(client, alice) -> None:
    response = create(client, alice)

    assert response.status_code == 201
    assert response.json() == {'message': 'Student added successfully!'}
    assert response.headers['location'] == f'{STUDENTS}/1'


def test_created_student_round_trips_through_get(client, alice) -> None:
    location = create(client, alice).headers['location']

    response = client.get(location)

    assert response.status_code == 200
    assert response.json() == {'id': 1, **alice}


@pytest.mark.parametrize('missing', ['name', 'domain', 'gpa', 'email'])
def test_create_with_missing_field_is_rejected_and_nothing_persisted(client, alice, missing) -> None:
    payload = {key: value for key, value in alice.items() if key != missing}

    response = create(client, payload)

    assert response.status_code == 400
    assert response.json() == {'error': 'Missing data'}
    assert client.get(STUDENTS).json() == []


def test_create_with_null_field_counts_as_missing(client, alice) -> None:
    response = create(client, {**alice, 'gpa': None})

    assert response.status_code == 400
    assert response.json() == {'error': 'Missing data'}


def test_create_without_body_is_missing_data(client) -> None:
    response = client.post(STUDENTS)

    assert response.status_code == 400
    assert response.json() == {'error': 'Missing data'}


def test_create_ignores_unknown_keys(client, alice) -> None:
    response = create(client, {**alice, 'id': 42, 'nickname': 'Al'})

    assert response.status_code == 201
    assert client.get(STUDENTS).json()[0]['id'] == 1


@pytest.mark.parametrize(
    ('field', 'value'),
    [
        ('gpa', 'not-a-number'),
        ('name', 'x' * 51),
        ('domain', 'x' * 51),
        ('email', 'a' * 115 + '@x.com'),
    ],
)
def test_create_with_invalid_value_is_rejected(client, alice, field, value) -> None:
    response = create(client, {**alice, field: value})

    assert response.status_code == 400
    body = response.json()
    assert body['error'] == 'Invalid data'
    assert field in body['details']
    assert client.get(STUDENTS).json() == []


@pytest.mark.parametrize('email', ['Alice@Example.COM', 'bob@school.test', 'carol@localhost'])
def test_create_stores_email_exactly_as_sent(client, alice, email) -> None:
    response = create(client, {**alice, 'email': email})

    assert response.status_code == 201
    assert client.get(response.headers['location']).json()['email'] == email


@pytest.mark.parametrize('gpa', [b'NaN', b'Infinity', b'-Infinity'])
def test_create_with_non_finite_gpa_is_invalid_not_conflict(client, gpa) -> None:
    body = b'{"name": "A", "domain": "B", "gpa": ' + gpa + b', "email": "a@example.com"}'

    response = client.post(STUDENTS, content=body, headers={'Content-Type': 'application/json'})

    assert response.status_code == 400
    assert response.json()['error'] == 'Invalid data'
    assert 'gpa' in response.json()['details']
    assert client.get(STUDENTS).json() == []


def test_update_with_non_finite_gpa_is_invalid(client, alice) -> None:
    create(client, alice)

    response = client.put(f'{STUDENTS}/1', content=b'{"gpa": NaN}', headers={'Content-Type': 'application/json'})

    assert response.status_code == 400
    assert client.get(f'{STUDENTS}/1').json()['gpa'] == 3.8


def test_create_with_malformed_json_is_rejected(client) -> None:
    response = client.post(STUDENTS, content=b'{"name": ', headers={'Content-Type': 'application/json'})

    assert response.status_code == 400
    assert response.json()['error'] == 'Invalid data'


def test_duplicate_email_is_conflict_and_leaves_existing_record(client, alice) -> None:
    create(client, alice)

    response = create(client, {**alice, 'name': 'Impostor', 'gpa': 1.0})

    assert response.status_code == 409
    assert response.json() == {'error': 'Email already exists'}
    students = client.get(STUDENTS).json()
    assert students == [{'id': 1, **alice}]


def test_list_students_empty(client) -> None:
    response = client.get(STUDENTS)

    assert response.status_code == 200
    assert response.json() == []


def test_list_students_supports_skip_and_limit(client, alice) -> None:
    for index in range(5):
        create(client, {**alice, 'email': f'student{index}@example.com'})

    response = client.get(STUDENTS, params={'skip': 1, 'limit': 2})

    assert [student['id'] for student in response.json()] == [2, 3]


def test_list_rejects_negative_skip(client) -> None:
    response = client.get(STUDENTS, params={'skip': -1})

    assert response.status_code == 400


def test_get_missing_student_is_404(client) -> None:
    response = client.get(f'{STUDENTS}/99')

    assert response.status_code == 404
    assert response.json() == {'error': 'Student not found'}


def test_get_with_non_integer_id_is_404(client) -> None:
    response = client.get(f'{STUDENTS}/abc')

    assert response.status_code == 404


def test_partial_update_changes_only_given_fields(client, alice) -> None:
    create(client, alice)

    response = client.put(f'{STUDENTS}/1', json={'gpa': 3.9})

    assert response.status_code == 200
    assert response.json() == {'message': 'Student updated successfully!'}
    assert client.get(f'{STUDENTS}/1').json() == {**alice, 'id': 1, 'gpa': 3.9}


def test_update_with_no_recognised_fields_is_400(client, alice) -> None:
    create(client, alice)

    response = client.put(f'{STUDENTS}/1', json={'id': 7, 'nickname': 'Al'})

    assert response.status_code == 400
    assert response.json() == {'error': 'No valid fields provided'}
    assert client.get(f'{STUDENTS}/1').json() == {'id': 1, **alice}


def test_update_with_empty_body_is_400(client, alice) -> None:
    create(client, alice)

    response = client.put(f'{STUDENTS}/1')

    assert response.status_code == 400
    assert response.json() == {'error': 'No valid fields provided'}


def test_update_missing_student_is_404_even_with_empty_payload(client) -> None:
    response = client.put(f'{STUDENTS}/5', json={})

    assert response.status_code == 404


def test_update_to_taken_email_is_conflict(client, alice) -> None:
    create(client, alice)
    create(client, {**alice, 'name': 'Bob', 'email': 'bob@example.com'})

    response = client.put(f'{STUDENTS}/2', json={'email': 'alice@example.com', 'name': 'Robert'})

    assert response.status_code == 409
    bob = client.get(f'{STUDENTS}/2').json()
    assert bob['email'] == 'bob@example.com'
    assert bob['name'] == 'Bob'


def test_delete_twice_second_call_is_404(client, alice) -> None:
    create(client, alice)

    first = client.delete(f'{STUDENTS}/1')
    second = client.delete(f'{STUDENTS}/1')

    assert first.status_code == 200
    assert first.json() == {'message': 'Student deleted successfully!'}
    assert second.status_code == 404
    assert client.get(STUDENTS).json() == []


def test_ids_are_not_reused_after_delete(client, alice) -> None:
    create(client, alice)
    client.delete(f'{STUDENTS}/1')

    response = create(client, alice)

    assert response.status_code == 201
    assert response.headers['location'] == f'{STUDENTS}/2'
    assert client.get(f'{STUDENTS}/1').status_code == 404


def test_full_scenario(client, alice) -> None:
    response = client.post(STUDENTS, json=alice)
    assert (response.status_code, response.json()) == (201, {'message': 'Student added successfully!'})

    response = client.get(STUDENTS)
    assert (response.status_code, response.json()) == (200, [{'id': 1, **alice}])

    assert client.get(f'{STUDENTS}/99').status_code == 404

    response = client.put(f'{STUDENTS}/1', json={'gpa': 3.9})
    assert (response.status_code, response.json()) == (200, {'message': 'Student updated successfully!'})

    response = client.delete(f'{STUDENTS}/1')
    assert (response.status_code, response.json()) == (200, {'message': 'Student deleted successfully!'})

    assert client.delete(f'{STUDENTS}/1').status_code == 404
