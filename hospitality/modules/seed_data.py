"""Demo guest profiles and hostels loaded into a fresh store."""

from hospitality.modules.models import GuestType

SEED_PROFILES = [
    {'student_id': 'STU001', 'name': 'Rahul Sharma', 'email': 'rahul.sharma@gmail.com',
     'phone': '9876543210', 'affiliation': 'VIT Chennai', 'guest_type': GuestType.EXTERNAL},
    {'student_id': 'STU002', 'name': 'Priya Krishnan', 'email': 'priya.k@gmail.com',
     'phone': '9876543211', 'affiliation': 'Amrita Coimbatore', 'guest_type': GuestType.AFFILIATED},
    {'student_id': 'STU003', 'name': 'Arun Kumar', 'email': 'arun.kumar@gmail.com',
     'phone': '9876543212', 'affiliation': 'SRM Chennai', 'guest_type': GuestType.EXTERNAL},
    {'student_id': 'STU004', 'name': 'Deepa Menon', 'email': 'deepa.m@gmail.com',
     'phone': '9876543213', 'affiliation': 'Amrita Bangalore', 'guest_type': GuestType.AFFILIATED},
    {'student_id': 'STU005', 'name': 'Vikram Reddy', 'email': 'vikram.r@gmail.com',
     'phone': '9876543214', 'affiliation': 'BITS Pilani', 'guest_type': GuestType.EXTERNAL},
    {'student_id': 'STU006', 'name': 'Ananya Nair', 'email': 'ananya.n@gmail.com',
     'phone': '9876543215', 'affiliation': 'NIT Trichy', 'guest_type': GuestType.EXTERNAL},
    {'student_id': 'STU007', 'name': 'Karthik Iyer', 'email': 'karthik.i@gmail.com',
     'phone': '9876543216', 'affiliation': 'Amrita Amritapuri', 'guest_type': GuestType.AFFILIATED},
    {'student_id': 'STU008', 'name': 'Sneha Pillai', 'email': 'sneha.p@gmail.com',
     'phone': '9876543217', 'affiliation': 'PSG Tech', 'guest_type': GuestType.EXTERNAL},
    {'student_id': 'STU009', 'name': 'Arjun Das', 'email': 'arjun.d@gmail.com',
     'phone': '9876543218', 'affiliation': 'CEG Anna University', 'guest_type': GuestType.EXTERNAL},
    {'student_id': 'STU010', 'name': 'Meera Suresh', 'email': 'meera.s@gmail.com',
     'phone': '9876543219', 'affiliation': 'Amrita Kochi', 'guest_type': GuestType.AFFILIATED},
]

SEED_HOSTELS = [
    {'id': 'H001', 'name': 'Vashista Single', 'sharing': 'Single Share', 'price': 2000,
     'total_beds': 100, 'occupied_beds': 45},
    {'id': 'H002', 'name': 'Vashista Dormitory', 'sharing': 'Dormitory', 'price': 1000,
     'total_beds': 80, 'occupied_beds': 42},
    {'id': 'H003', 'name': 'Ganga', 'sharing': 'Double Share', 'price': 1500,
     'total_beds': 50, 'occupied_beds': 35},
    {'id': 'H004', 'name': 'Yamuna', 'sharing': 'Triple Share', 'price': 1200,
     'total_beds': 120, 'occupied_beds': 90},
]
