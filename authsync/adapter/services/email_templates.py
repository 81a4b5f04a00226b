from html import escape
from typing import NamedTuple


class RenderedEmail(NamedTuple):
    subject: str
    html: str
    text: str


def render_password_reset_email(reset_link: str, expires_minutes: int) -> RenderedEmail:
    link = escape(reset_link, quote=True)

    html = f"""
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="utf-8">
        <style>
            body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; }}
            .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
            .header {{ background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); color: white; padding: 30px; text-align: center; border-radius: 10px 10px 0 0; }}
            .content {{ background: #f9f9f9; padding: 30px; border-radius: 0 0 10px 10px; }}
            .button {{ display: inline-block; background: #667eea; color: white; padding: 12px 30px; text-decoration: none; border-radius: 5px; margin: 20px 0; }}
            .footer {{ text-align: center; margin-top: 20px; font-size: 12px; color: #666; }}
        </style>
    </head>
    <body>
        <div class="container">
            <div class="header">
                <h1>Password Reset Request</h1>
            </div>
            <div class="content">
                <h2>Reset Your Password</h2>
                <p>We received a request to reset your password. Use the button below to set a new password:</p>
                <a href="{link}" class="button">Reset Password</a>
                <p><strong>This link will expire in {expires_minutes} minutes.</strong></p>
                <p>If the button doesn't work, copy and paste this link into your browser:</p>
                <p style="word-break: break-all; color: #667eea;">{link}</p>
                <p>If you didn't request this password reset, please ignore this email. Your account remains secure.</p>
            </div>
            <div class="footer">
                <p>This email was sent from an automated system. Please do not reply.</p>
            </div>
        </div>
    </body>
    </html>
    """

    text = (
        "We received a request to reset your password.\n\n"
        f"Open this link to set a new password (expires in {expires_minutes} minutes):\n"
        f"{reset_link}\n\n"
        "If you didn't request this password reset, please ignore this email."
    )

    return RenderedEmail(subject="Password Reset Request", html=html, text=text)
