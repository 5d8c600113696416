from .base_site import SiteProfile, register_site


SALESFORCE = register_site(SiteProfile(
    name="salesforce",
    login_path="/",
    change_password_path="/_ui/core/userprofile/ui/ChangePassword?retURL=/home",
    home_path="/home/home.jsp",
    username_input="#username",
    password_input="#password",
    login_button="#Login",
    user_nav_button=".userNavButton",
    logout_link="link=Logout",
    current_password_input='xpath=//*[@id="currentpassword"]',
    new_password_input='xpath=//*[@id="newpassword"]',
    confirm_password_input='xpath=//*[@id="confirmpassword"]',
    security_answer_input='xpath=//*[@id="answer"]',
    change_password_button='xpath=//*[@id="password-button"]',
))
