"""
notif-api: relays push notifications to recipients registered in Firestore
"""
