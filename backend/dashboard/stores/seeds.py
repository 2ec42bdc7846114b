"""Seed collections written to storage the first time a store finds its slot empty."""
from __future__ import annotations

from typing import Any, Final

from ..auth.rbac_contract import Permission


SEED_USERS: Final[tuple[dict[str, Any], ...]] = (
    {
        "id": "1",
        "email": "admin@example.com",
        "name": "Admin User",
        "role": "admin",
        "createdAt": "2024-01-01",
        "status": "active",
        "division": "IT Division",
        "organization": "Head Office",
        "position": "System Administrator",
        "department": "Information Technology",
    },
    {
        "id": "2",
        "email": "manager@example.com",
        "name": "Manager User",
        "role": "manager",
        "createdAt": "2024-01-02",
        "status": "active",
        "division": "Operations Division",
        "organization": "Regional Office",
        "position": "Operations Manager",
        "department": "Operations",
    },
    {
        "id": "3",
        "email": "user@example.com",
        "name": "Regular User",
        "role": "user",
        "createdAt": "2024-01-03",
        "status": "active",
        "division": "HR Division",
        "organization": "Head Office",
        "position": "HR Specialist",
        "department": "Human Resources",
    },
    {
        "id": "4",
        "email": "finance@example.com",
        "name": "Finance User",
        "role": "user",
        "createdAt": "2024-01-04",
        "status": "active",
        "division": "Finance Division",
        "organization": "Head Office",
        "position": "Financial Analyst",
        "department": "Finance",
    },
    {
        "id": "5",
        "email": "marketing@example.com",
        "name": "Marketing User",
        "role": "user",
        "createdAt": "2024-01-05",
        "status": "inactive",
        "division": "Marketing Division",
        "organization": "Branch Office",
        "position": "Marketing Coordinator",
        "department": "Marketing",
    },
)

SEED_ROLES: Final[tuple[dict[str, Any], ...]] = (
    {
        "id": "admin",
        "name": "Administrator",
        "description": "Full system access with all permissions",
        "permissions": [permission.value for permission in Permission],
        "createdAt": "2024-01-01",
    },
    {
        "id": "manager",
        "name": "Manager",
        "description": "Can manage users and view reports",
        "permissions": ["users.read", "users.update", "roles.read", "dashboard.access", "reports.view"],
        "createdAt": "2024-01-01",
    },
    {
        "id": "user",
        "name": "User",
        "description": "Basic user with limited access",
        "permissions": ["users.read", "dashboard.access"],
        "createdAt": "2024-01-01",
    },
)

SEED_ASSETS: Final[tuple[dict[str, Any], ...]] = (
    {
        "id": "asset-1",
        "name": "Laptop - MacBook Pro",
        "category": "Hardware",
        "status": "active",
        "owner": "Admin User",
        "createdAt": "2024-01-10",
        "description": "Primary admin laptop",
    },
    {
        "id": "asset-2",
        "name": "GitHub Organization",
        "category": "Software",
        "status": "active",
        "owner": "Manager User",
        "createdAt": "2024-01-12",
        "description": "Version control hosting",
    },
)

SEED_CONTRACTS: Final[tuple[dict[str, Any], ...]] = (
    {
        "id": "c-1",
        "title": "Employee Contract - John Doe",
        "party": "John Doe",
        "startDate": "2024-01-01",
        "endDate": "2025-01-01",
        "status": "active",
        "type": "employee",
        "createdAt": "2024-01-02",
        "notes": "Full-time employee contract",
    },
    {
        "id": "c-2",
        "title": "Freelance Design Work",
        "party": "Jane Smith",
        "startDate": "2024-06-01",
        "endDate": "2024-12-31",
        "status": "active",
        "type": "freelance",
        "createdAt": "2024-05-15",
        "notes": "UI/UX design project",
    },
    {
        "id": "c-3",
        "title": "Internship Program",
        "party": "Mike Johnson",
        "startDate": "2024-09-01",
        "endDate": "2024-12-31",
        "status": "active",
        "type": "internship",
        "createdAt": "2024-08-15",
        "notes": "Software development internship",
    },
    {
        "id": "c-4",
        "title": "Vendor Service Agreement",
        "party": "Tech Solutions Ltd.",
        "startDate": "2024-03-01",
        "endDate": "2025-02-28",
        "status": "active",
        "type": "vendor",
        "createdAt": "2024-02-15",
        "notes": "IT support services",
    },
)

SEED_EMAILS: Final[tuple[dict[str, Any], ...]] = (
    {
        "id": "ea-1",
        "address": "noreply@example.com",
        "provider": "Gmail",
        "status": "active",
        "description": "Default outbound address",
        "createdAt": "2024-01-05",
    },
    {
        "id": "ea-2",
        "address": "support@example.com",
        "provider": "AWS SES",
        "status": "inactive",
        "description": "Support inbox (paused)",
        "createdAt": "2024-02-10",
    },
)

SEED_PAYROLL: Final[tuple[dict[str, Any], ...]] = (
    {
        "id": "p-1",
        "employeeName": "Admin User",
        "employeeEmail": "admin@example.com",
        "period": "2025-08",
        "grossPay": 5000,
        "deductions": 500,
        "netPay": 4500,
        "status": "paid",
        "createdAt": "2025-08-31",
        "notes": "Monthly salary",
    },
)

SEED_TICKETS: Final[tuple[dict[str, Any], ...]] = (
    {
        "id": "t-1",
        "title": "Cannot login",
        "requester": "user@example.com",
        "priority": "high",
        "status": "pending",
        "createdAt": "2025-09-01",
        "description": "User cannot login with correct password",
    },
    {
        "id": "t-2",
        "title": "Database optimization",
        "requester": "admin@example.com",
        "priority": "medium",
        "status": "on_process",
        "createdAt": "2025-09-02",
        "description": "Optimize database queries for better performance",
    },
    {
        "id": "t-3",
        "title": "UI Design Review",
        "requester": "designer@example.com",
        "priority": "low",
        "status": "review",
        "createdAt": "2025-09-03",
        "description": "Review new UI design mockups",
    },
    {
        "id": "t-4",
        "title": "Bug Fix - Payment Gateway",
        "requester": "dev@example.com",
        "priority": "high",
        "status": "completed",
        "createdAt": "2025-09-04",
        "description": "Fixed payment gateway integration issue",
    },
)

SEED_CHANGE_REQUESTS: Final[tuple[dict[str, Any], ...]] = (
    {
        "id": "cr-1",
        "title": "Increase password length",
        "requester": "manager@example.com",
        "impact": "medium",
        "status": "pending",
        "createdAt": "2025-09-02",
        "description": "Change minimum from 8 to 12 characters",
    },
    {
        "id": "cr-2",
        "title": "Database migration",
        "requester": "admin@example.com",
        "impact": "high",
        "status": "on_process",
        "createdAt": "2025-09-03",
        "description": "Migrate database to new version",
    },
    {
        "id": "cr-3",
        "title": "UI/UX improvements",
        "requester": "designer@example.com",
        "impact": "low",
        "status": "review",
        "createdAt": "2025-09-04",
        "description": "Review and approve new UI design changes",
    },
    {
        "id": "cr-4",
        "title": "Security patch deployment",
        "requester": "security@example.com",
        "impact": "high",
        "status": "completed",
        "createdAt": "2025-09-05",
        "description": "Deploy critical security patches",
    },
)

SEED_ATTENDANCE: Final[tuple[dict[str, Any], ...]] = (
    {
        "id": "a-1",
        "employeeName": "Admin User",
        "employeeEmail": "admin@example.com",
        "date": "2025-09-05",
        "checkIn": "09:05",
        "checkOut": "17:10",
        "status": "late",
        "createdAt": "2025-09-05",
        "notes": "Traffic delay",
    },
)

SEED_KPIS: Final[tuple[dict[str, Any], ...]] = (
    {
        "id": "kpi-1",
        "name": "Customer Satisfaction",
        "description": "Average customer satisfaction score",
        "target": 4.5,
        "current": 4.2,
        "unit": "out of 5",
        "frequency": "monthly",
        "status": "at_risk",
        "createdAt": "2025-09-01",
        "owner": "Customer Success Team",
    },
)

SEED_OKRS: Final[tuple[dict[str, Any], ...]] = (
    {
        "id": "okr-1",
        "objective": "Improve User Experience",
        "keyResults": [
            "Reduce page load time by 50%",
            "Achieve 95% user satisfaction score",
            "Decrease support tickets by 30%",
        ],
        "progress": 65,
        "quarter": "Q3 2025",
        "status": "in_progress",
        "createdAt": "2025-09-01",
        "owner": "Product Team",
    },
)
