"""
Page Route Table
Declares the web client's page paths and which of them sit behind the role gate.
Paths use ":name" for dynamic segments. Static paths win over dynamic ones.
"""

ADMIN = ["SUPERADMIN", "SUPPORT"]

# (path, page, access) where access is one of:
#   None                          -> public
#   {"require_auth": True}        -> any signed-in member
#   {"allowed_roles": [...]}      -> signed-in member with one of the roles
#   {"require_admin": True}       -> signed-in member with an admin role
ROUTES = [
    # Public pages
    ("/", "Home", None),
    ("/test", "TestPage", None),
    ("/about", "About", None),
    ("/about/contact", "Contact", None),
    ("/terms", "Terms", None),
    ("/privacy", "Privacy", None),
    ("/about/partners", "Partners", None),
    ("/about/news", "News", None),
    ("/about/changing-lives", "ChangingLives", None),
    ("/about/projects", "Projects", None),
    ("/about/mission", "Mission", None),
    ("/about/association-members", "AssociationMembers", None),
    ("/projects/:id", "ProjectDetail", None),
    ("/partners/:id", "PartnerDetail", None),
    ("/news/:slug", "NewsDetail", None),
    ("/team", "Team", None),
    ("/my-account", "MyAccount", None),
    ("/register", "Register", None),
    ("/login", "Login", None),
    ("/services", "Services", None),
    ("/services/o-secours", "OSecours", None),
    ("/services/credit-account", "CreditAccount", None),
    ("/services/credit-system", "CreditSystem", None),
    ("/services/hire-purchase", "HirePurchase", None),
    ("/services/payday-loan", "PaydayLoan", None),
    ("/client-payment", "ClientPayment", None),
    ("/affiliate-dashboard", "AffiliateDashboard", None),
    ("/debug", "Debug", None),
    ("/cards", "Cards", None),
    ("/activate-card", "ActivateCard", None),
    ("/jobs", "Jobs", None),
    ("/jobs/:id", "JobDetail", None),
    ("/job-center", "JobCenter", None),
    ("/post-job", "PostJob", None),
    ("/discounts", "Discounts", None),
    ("/discounts/:id", "DiscountDetail", None),
    ("/competitions", "Competitions", None),
    ("/affiliates", "Affiliates", None),
    ("/affiliate-program", "AffiliateProgram", None),
    ("/affiliates/members", "AffiliateMembers", None),
    ("/affiliates/merchants", "AffiliateMerchants", None),
    ("/affiliates/distributors", "AffiliateDistributors", None),
    ("/services/payday-advance", "PaydayAdvance", None),
    ("/services/online-store", "OnlineStore", None),
    ("/shop", "PublicShop", None),
    ("/shop/:slug", "ShopDetail", None),
    ("/dashboard/shop", "Shop", None),
    ("/public/jobs", "PublicJobs", None),
    ("/public/affiliates", "PublicAffiliates", None),
    ("/cart", "Cart", None),
    ("/checkout", "Checkout", None),
    ("/wishlist", "Wishlist", None),
    ("/services/secours/school-fees", "SchoolFees", None),
    ("/services/secours/motorbikes", "MotorbikesSupport", None),
    ("/services/secours/mobile-phones", "MobilePhones", None),
    ("/services/secours/auto-services", "AutoServices", None),
    ("/services/secours/first-aid", "FirstAid", None),
    ("/services/secours/cata-catani", "CataCatani", None),
    ("/superadmin/partners-management", "PartnersManagement", None),
    ("/secours/my-account", "SecoursMyAccount", None),
    ("/services/o-secours-info", "OSecoursPage", None),
    ("/services/payday-advance-info", "PaydayAdvancePage", None),
    ("/project-requests", "ProjectRequests", None),
    ("/project-submission", "ProjectSubmission", None),
    ("/faq", "Faq", None),
    ("/forgot-password", "ForgotPassword", None),
    ("/reset-password", "ResetPassword", None),
    ("/thank-you", "ThankYou", None),
    ("/cookies", "Cookies", None),
    ("/access-lawyer", "AccessLawyer", None),
    ("/registration/thank-you", "RegistrationThankYou", None),
    ("/ebooks", "EBooks", None),
    ("/client-subscription", "ClientSubscription", None),
    ("/payment-status", "PaymentStatus", None),
    ("/career", "Career", None),
    ("/career/:id", "CareerJobDetail", None),
    ("/events", "Events", None),
    ("/events/:id", "EventDetail", None),
    ("/payment/success", "PaymentSuccess", None),
    ("/payment/cancel", "PaymentCancel", None),
    ("/unauthorized", "Unauthorized", None),

    # Old membership links, rendered by the pages they moved to
    ("/membership/payment", "ClientPayment", None),
    ("/membership/selection", "ClientSubscription", None),

    # Member pages
    ("/dashboard", "Dashboard", {"allowed_roles": ["USER"]}),
    # misspelled path kept so existing links keep working
    ("/partners/dashbord", "PartnerDashboard", {"allowed_roles": ["PARTNER"]}),
    ("/partners/dashboard", "PartnerDashboard", {"allowed_roles": ["PARTNER"]}),

    # Back-office
    ("/admin", "AdminDashboard", {"allowed_roles": ["SUPPORT"]}),
    ("/admin/dashboard", "AdminDashboard", {"allowed_roles": ["SUPPORT"]}),
    ("/admin/discount-management", "DiscountManagement", {"allowed_roles": ["SUPPORT"]}),
    ("/superadmin/secours", "SecoursAdmin", {"allowed_roles": ["SUPERADMIN"]}),
    ("/admin/secours", "SecoursAdmin", {"allowed_roles": ["SUPPORT"]}),
    ("/admin/agent-panel", "AffiliateManagement", {"allowed_roles": ["SUPPORT"]}),
    ("/admin/jobs", "JobManagement", {"allowed_roles": ["SUPPORT"]}),
    ("/admin/projects-management", "ProjectsManagement", {"allowed_roles": ["SUPPORT"]}),
    ("/superadmin", "SuperAdminDashboard", {"allowed_roles": ["SUPERADMIN"]}),
    ("/superadmin/contact", "ContactManagement", {"require_admin": True}),
    ("/superadmin/contact/:id", "ContactDetail", {"require_admin": True}),
    ("/superadmin/dashboard", "SuperAdminDashboard", {"allowed_roles": ["SUPERADMIN"]}),
    ("/admin/payments", "PaymentManagement", {"allowed_roles": ["SUPPORT", "SUPERADMIN"]}),
    ("/admin/shop-management", "ShopManagement", {"allowed_roles": ["SUPPORT", "SUPERADMIN"]}),
    ("/superadmin/user-management", "UserManagement", {"allowed_roles": ["SUPERADMIN"]}),
    ("/superadmin/payment-gateways", "PaymentGatewayManagement", {"allowed_roles": ["SUPERADMIN"]}),
    ("/admin/merchant-approvals", "MerchantApprovals", {"allowed_roles": ["SUPPORT", "SUPERADMIN"]}),
    ("/admin/ebook-management", "EbookManagement", {"allowed_roles": ["SUPPORT", "SUPERADMIN"]}),
    ("/admin/career-jobs", "CareerJobsManagement", {"allowed_roles": ["SUPPORT", "SUPERADMIN"]}),
    ("/admin/events-management", "EventsManagement", {"allowed_roles": ["SUPPORT", "SUPERADMIN"]}),
    ("/superadmin/career-jobs", "SuperAdminCareerJobsManagement", {"allowed_roles": ["SUPERADMIN"]}),
    ("/superadmin/events-management", "SuperAdminEventsManagement", {"allowed_roles": ["SUPERADMIN"]}),
    ("/superadmin/discount-management", "SuperAdminDiscountManagement", {"allowed_roles": ["SUPERADMIN"]}),
    ("/superadmin/news", "NewsManagement", {"allowed_roles": ["SUPERADMIN", "ADMIN"]}),
    ("/admin/physical-cards", "PhysicalCardRequests", {"allowed_roles": ["SUPPORT", "SUPERADMIN"]}),
    ("/superadmin/physical-cards", "SuperAdminPhysicalCardManagement", {"allowed_roles": ["SUPERADMIN"]}),
]

LOGIN_PATH = "/login"
UNAUTHORIZED_PATH = "/unauthorized"


def get_route_table():
    """Route table as dicts, with the role gate spelled out on each entry."""
    table = []
    for path, page, access in ROUTES:
        access = access or {}
        table.append({
            "path": path,
            "page": page,
            "require_auth": bool(access.get("require_auth") or access.get("allowed_roles") or access.get("require_admin")),
            "require_admin": bool(access.get("require_admin")),
            "allowed_roles": list(access.get("allowed_roles") or (ADMIN if access.get("require_admin") else [])),
        })
    return table
