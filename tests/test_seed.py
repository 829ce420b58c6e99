from seed import SAMPLE_STUDENTS, seed_data
from student_service.services.student import student as crud_student


def test_seed_inserts_sample_students(db) -> None:
    inserted = seed_data(db)

    assert inserted == len(SAMPLE_STUDENTS)
    assert [student.email for student in crud_student.get_students(db)] == [
        row['email'] for row in SAMPLE_STUDENTS
    ]


def test_seed_skips_when_data_exists(db) -> None:
    seed_data(db)

    assert seed_data(db) == 0
    assert len(crud_student.get_students(db)) == len(SAMPLE_STUDENTS)


def test_seeded_students_are_served_by_api(client, db) -> None:
    seed_data(db)

    response = client.get('/api/v1/students/2')

    assert response.json()['name'] == 'Bob'
