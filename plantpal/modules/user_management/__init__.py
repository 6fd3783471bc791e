# 📄 File: plantpal/modules/user_management/__init__.py
# 🧭 Purpose (Layman Explanation):
# Everything about PlantPal accounts: signing up, logging in, profiles and
# Google/Facebook sign-in.
# 🧪 Purpose (Technical Summary):
# User management module (credential store). Layers: domain (models, repository
# port, AuthService), infrastructure (memory/database repositories, OAuth
# providers) and presentation (auth routes and schemas).
# 🔗 Dependencies:
# plantpal.shared (config, security, exceptions, logging)
# 🔄 Connected Modules / Calls From:
# plantpal.api.router, plantpal.shared.infrastructure.container
