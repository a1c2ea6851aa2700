"""tkinter UI"""
