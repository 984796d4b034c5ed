import pytest
from django.core.management import call_command

from clinic.models import Announcement, Room

pytestmark = pytest.mark.django_db


def test_init_rooms_seeds_twenty_available_rooms():
    Room.objects.create(name='Old', room_number=99, status=Room.STATUS_OCCUPIED)
    call_command('init_rooms')
    assert Room.objects.count() == 20
    assert list(Room.objects.values_list('room_number', flat=True)) == list(range(1, 21))
    assert not Room.objects.filter(status=Room.STATUS_OCCUPIED).exists()
    assert Room.objects.get(room_number=3).name == 'Room 3'


def test_init_rooms_count_option():
    call_command('init_rooms', count=5)
    assert Room.objects.count() == 5


def test_rooms_listed_by_number_and_summary(client_for, nurse):
    Room.objects.create(name='B', room_number=2, status=Room.STATUS_OCCUPIED)
    Room.objects.create(name='A', room_number=1)
    Room.objects.create(name='C', room_number=3)
    client = client_for(nurse)
    r = client.get('/api/rooms')
    assert [room['roomNumber'] for room in r.data] == [1, 2, 3]
    r = client.get('/api/rooms/summary')
    assert r.status_code == 200
    assert r.data == {'total': 3, 'available': 2, 'occupied': 1}


def test_nurse_updates_room_status(client_for, nurse):
    room = Room.objects.create(name='A', room_number=1)
    Room.objects.create(name='B', room_number=2)
    client = client_for(nurse)
    r = client.put(f'/api/rooms/{room.id}', {'status': 'Occupied'}, format='json')
    assert r.status_code == 200
    assert r.data['status'] == 'Occupied'

    listed = {x['roomNumber']: x['status'] for x in client.get('/api/rooms').data}
    assert listed == {1: 'Occupied', 2: 'Available'}
    assert client.get('/api/rooms/summary').data == {'total': 2, 'available': 1, 'occupied': 1}


def test_invalid_room_status_is_rejected(client_for, receptionist):
    room = Room.objects.create(name='A', room_number=1)
    r = client_for(receptionist).put(f'/api/rooms/{room.id}', {'status': 'Closed'}, format='json')
    assert r.status_code == 400
    room.refresh_from_db()
    assert room.status == Room.STATUS_AVAILABLE


def test_room_number_is_unique(client_for, receptionist):
    Room.objects.create(name='A', room_number=1)
    r = client_for(receptionist).post('/api/rooms', {'name': 'A2', 'roomNumber': 1}, format='json')
    assert r.status_code == 400


def test_doctor_cannot_create_room(client_for, doctor):
    r = client_for(doctor).post('/api/rooms', {'name': 'X', 'roomNumber': 7}, format='json')
    assert r.status_code == 403


def test_announcement_author_defaults_to_poster(client_for, doctor):
    r = client_for(doctor).post(
        '/api/announcements',
        {'title': 'Power outage', 'content': 'Generator test at <span>noon</span>', 'urgency': True},
        format='json',
    )
    assert r.status_code == 201
    assert r.data['author'] == 'Dr. Strange'
    assert r.data['urgency'] == 'urgent'
    assert r.data['content'] == 'Generator test at noon'


def test_announcement_urgency_must_be_known(client_for, nurse):
    r = client_for(nurse).post('/api/announcements', {'content': 'Hi', 'urgency': 'critical'}, format='json')
    assert r.status_code == 400
    assert not Announcement.objects.exists()


def test_announcements_newest_first_and_delete(client_for, receptionist):
    client = client_for(receptionist)
    first = client.post('/api/announcements', {'content': 'one'}, format='json').data
    second = client.post('/api/announcements', {'content': 'two'}, format='json').data
    r = client.get('/api/announcements')
    assert [a['id'] for a in r.data] == [second['id'], first['id']]
    r = client.delete(f"/api/announcements/{first['id']}")
    assert r.data['message'] == 'Announcement deleted'
    assert Announcement.objects.count() == 1


def test_content_only_announcement(client_for, nurse):
    r = client_for(nurse).post(
        '/api/announcements', {'content': 'Staff meeting at 3pm', 'urgency': False}, format='json'
    )
    assert r.status_code == 201
    assert r.data['title'] == ''
    assert r.data['content'] == 'Staff meeting at 3pm'
    assert r.data['urgency'] == 'normal'
    assert r.data['critical'] is False


def test_critical_checkbox_marks_announcement_urgent(client_for, receptionist):
    r = client_for(receptionist).post(
        '/api/announcements', {'content': 'Lift out of order', 'critical': True}, format='json'
    )
    assert r.status_code == 201
    assert r.data['urgency'] == 'urgent'
    assert r.data['critical'] is True


def test_announcement_requires_content(client_for, nurse):
    r = client_for(nurse).post('/api/announcements', {'title': 'Only a title', 'content': '  '}, format='json')
    assert r.status_code == 400
    assert 'content' in r.data['errors']
    assert not Announcement.objects.exists()
