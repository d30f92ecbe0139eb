from fastapi.testclient import TestClient
from app.main import app

client = TestClient(app)
headers = {'X-User-Email': 'checks@example.com'}

print('ROOT:')
print(client.get('/').json())

print('\nHEALTH:')
print(client.get('/health').json())

print('\nDB HEALTH:')
try:
    resp = client.get('/health/db')
    print(resp.status_code)
    try:
        print(resp.json())
    except Exception:
        print(resp.text)
except Exception as e:
    print('DB call raised exception:', e)

print('\nLOGIN:')
print(client.post('/auth/login', json={'email': 'checks@example.com', 'name': 'Checks', 'role': 'authority'}).json())

print('\nSUBMIT:')
resp = client.post('/reports', headers=headers, json={
    'type': 'pothole',
    'title': 'Smoke check pothole',
    'description': 'Created by run_checks.py',
    'image_url': 'https://example.com/smoke.jpg',
    'location_error': 'timeout',
})
print(resp.status_code)
body = resp.json()
print(body.get('notices'))

report_id = body.get('report', {}).get('id')
if report_id:
    print('\nAPPROVE / RESOLVE:')
    for op in ('approve', 'resolve'):
        resp = client.post(f'/authority/reports/{report_id}/{op}', headers=headers)
        print(op, resp.status_code, resp.json().get('applied'))

print('\nSTATS:')
print(client.get('/reports/stats').json())

print('\nMAP:')
print(len(client.get('/map/markers').json()['markers']), 'markers')
